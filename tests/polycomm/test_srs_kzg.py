"""
Tests for SRS generation, chunked commitments and the reference KZG batch opening.

Covers:
- SRS generation (deterministic, lengths)
- commit: chunk count, linearity, agreement with per-chunk commitments
- create_witness + verify_opening
- prepare_batch + batch_verify end to end, and tampering
"""

import dataclasses

import pytest

from zkp.polycomm.batch import combine_evaluations, combined_inner_product
from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import FR, G1, G2, ec_add, ec_mul
from zkp.polycomm.kzg import (
    batch_verify, combined_polynomial, create_witness, prepare_batch, verify_opening,
)
from zkp.polycomm.polynomial import Polynomial
from zkp.polycomm.srs import SRS, chunk_polynomial, commit, commit_chunk, evaluate_chunks
from zkp.polycomm.transcript import Sha256Sponge


def poly(*coeffs):
    return Polynomial([FR(c) for c in coeffs])


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class TestSRS:
    """SRS.generate 테스트."""

    def test_lengths(self, srs_small):
        assert len(srs_small.g1_powers) == 4
        assert len(srs_small.g2_powers) == 2
        assert srs_small.size == 4
        assert srs_small.max_degree == 3

    def test_first_elements_are_generators(self, srs_small):
        assert srs_small.g1_powers[0] == G1
        assert srs_small.g2_powers[0] == G2

    def test_deterministic_with_same_seed(self):
        assert SRS.generate(2, seed=7).g1_powers == SRS.generate(2, seed=7).g1_powers

    def test_different_seeds(self):
        assert SRS.generate(1, seed=1).g1_powers != SRS.generate(1, seed=2).g1_powers

    def test_without_seed(self):
        assert SRS.generate(0).size == 1

    def test_negative_degree_raises(self):
        with pytest.raises(ValueError):
            SRS.generate(-1)


# ─────────────────────────────────────────────────────────────────────
# Chunked commitments
# ─────────────────────────────────────────────────────────────────────

class TestCommit:
    """청크 커밋 테스트."""

    def test_constant(self, srs_small):
        assert commit(poly(7), srs_small) == PolyComm([ec_mul(G1, 7)])

    def test_zero_polynomial_is_identity(self, srs_small):
        assert commit(Polynomial.zero(), srs_small) == PolyComm.identity()

    @pytest.mark.parametrize("num_coeffs,num_chunks", [
        (1, 1), (4, 1), (5, 2), (8, 2), (9, 3),
    ])
    def test_chunk_count(self, srs_small, num_coeffs, num_chunks):
        p = Polynomial([FR(i + 1) for i in range(num_coeffs)])
        assert len(commit(p, srs_small)) == num_chunks

    def test_chunks_commit_coefficient_ranges(self, srs_small):
        p = poly(1, 2, 3, 4, 5, 6)
        comm = commit(p, srs_small)
        assert comm.elems[0] == commit_chunk(poly(1, 2, 3, 4), srs_small)
        assert comm.elems[1] == commit_chunk(poly(5, 6), srs_small)

    def test_linear_chunk_matches_srs(self, srs_small):
        expected = ec_add(
            ec_mul(srs_small.g1_powers[0], 3),
            ec_mul(srs_small.g1_powers[1], 5),
        )
        assert commit(poly(3, 5), srs_small).elems == [expected]

    def test_linearity_across_chunk_counts(self, srs_small):
        p = poly(1, 2)                    # 1 청크
        q = poly(0, 0, 0, 0, 0, 9)        # 2 청크
        assert commit(p + q, srs_small) == commit(p, srs_small) + commit(q, srs_small)

    def test_scaling(self, srs_small):
        p = poly(2, 3, 4, 5, 6)
        s = FR(11)
        assert commit(p * s, srs_small) == commit(p, srs_small).scale(s)

    def test_oversized_chunk_raises(self, srs_small):
        with pytest.raises(ValueError):
            commit_chunk(poly(1, 2, 3, 4, 5), srs_small)

    def test_chunk_polynomial(self):
        assert chunk_polynomial(poly(1, 2, 3, 4, 5), 4) == [poly(1, 2, 3, 4), poly(5)]

    def test_evaluate_chunks(self):
        p = poly(1, 2, 3, 4, 5, 6)
        z = FR(2)
        values = evaluate_chunks(p, 4, z)
        assert values == [FR(1 + 4 + 12 + 32), FR(5 + 12)]
        # f(z) = f0(z) + z^4 · f1(z)
        assert p.evaluate(z) == values[0] + z ** 4 * values[1]


# ─────────────────────────────────────────────────────────────────────
# Single opening
# ─────────────────────────────────────────────────────────────────────

class TestOpening:
    """KZG create_witness + verify_opening 테스트."""

    def test_valid_opening(self, srs_small):
        p = poly(1, 2, 3)
        point = FR(3)
        c = commit(p, srs_small).elems[0]
        proof = create_witness(p, point, srs_small)
        assert verify_opening(c, proof, point, p.evaluate(point), srs_small)

    def test_wrong_evaluation_fails(self, srs_small):
        p = poly(1, 2)
        c = commit(p, srs_small).elems[0]
        proof = create_witness(p, 3, srs_small)
        assert not verify_opening(c, proof, 3, FR(8), srs_small)


# ─────────────────────────────────────────────────────────────────────
# Batch opening end to end
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def chunked_polys():
    """One 2-chunk polynomial and one 1-chunk polynomial (SRS size 4)."""
    return [
        Polynomial([FR(c) for c in (3, 1, 4, 1, 5, 9)]),
        Polynomial([FR(c) for c in (2, 7, 1)]),
    ]


@pytest.fixture(scope="module")
def batch_one_point(chunked_polys, srs_small):
    return prepare_batch(Sha256Sponge(), chunked_polys, [FR(17)], srs_small)


class TestBatchOpening:
    """prepare_batch → batch_verify 테스트."""

    def test_combined_polynomial_uses_continuous_exponents(self, chunked_polys, srs_small):
        polyscale = FR(3)
        combined = combined_polynomial(chunked_polys, polyscale, srs_small)
        f0, f1 = chunked_polys[0].chunks(4)
        expected = f0 + f1 * FR(3) + chunked_polys[1] * FR(9)
        assert combined == expected

    def test_batch_shape(self, batch_one_point):
        assert [len(e.commitment) for e in batch_one_point.evaluations] == [2, 1]
        assert len(batch_one_point.opening) == 1

    def test_combined_inner_product_matches_tables(self, batch_one_point):
        b = batch_one_point
        assert b.combined_inner_product == combined_inner_product(
            b.polyscale, b.evalscale, [e.evaluations for e in b.evaluations]
        )

    def test_challenges_are_deterministic(self, chunked_polys, srs_small, batch_one_point):
        again = prepare_batch(Sha256Sponge(), chunked_polys, [FR(17)], srs_small)
        assert again.polyscale == batch_one_point.polyscale
        assert again.evalscale == batch_one_point.evalscale

    def test_verify_one_point(self, batch_one_point, srs_small):
        assert batch_verify(batch_one_point, srs_small)

    def test_verify_two_points(self, chunked_polys, srs_small):
        zeta = FR(17)
        batch = prepare_batch(Sha256Sponge(), chunked_polys, [zeta, zeta * FR(5)], srs_small)
        assert batch_verify(batch, srs_small)

    def test_tampered_inner_product_fails(self, batch_one_point, srs_small):
        tampered = dataclasses.replace(
            batch_one_point,
            combined_inner_product=batch_one_point.combined_inner_product + FR(1),
        )
        assert not batch_verify(tampered, srs_small)

    def test_tampered_evaluation_fails(self, batch_one_point, srs_small):
        evaluations = list(batch_one_point.evaluations)
        first = evaluations[0]
        bad_table = [[v + FR(1) for v in row] for row in first.evaluations]
        evaluations[0] = dataclasses.replace(first, evaluations=bad_table)
        tampered = dataclasses.replace(
            batch_one_point,
            evaluations=evaluations,
            combined_inner_product=combined_inner_product(
                batch_one_point.polyscale,
                batch_one_point.evalscale,
                [e.evaluations for e in evaluations],
            ),
        )
        assert not batch_verify(tampered, srs_small)

    def test_cancelling_evaluation_change_fails(self, srs_small):
        # y = e0 + polyscale·e1 is unchanged by (e0 + polyscale, e1 - 1)
        polys = [poly(2, 7, 1), poly(5, 3)]
        batch = prepare_batch(Sha256Sponge(), polys, [FR(17)], srs_small)
        assert [e.evaluations for e in batch.evaluations] == [[[FR(410)]], [[FR(56)]]]

        first, second = batch.evaluations
        forged = dataclasses.replace(batch, evaluations=[
            dataclasses.replace(first, evaluations=[[FR(410) + batch.polyscale]]),
            dataclasses.replace(second, evaluations=[[FR(55)]]),
        ])
        assert combine_evaluations(forged.evaluations, batch.polyscale) == \
            combine_evaluations(batch.evaluations, batch.polyscale)
        assert not batch_verify(forged, srs_small)

    def test_forged_challenges_fail(self, batch_one_point, srs_small):
        tampered = dataclasses.replace(batch_one_point, polyscale=FR(2), evalscale=FR(3))
        assert not batch_verify(tampered, srs_small)

    def test_verifier_sponge_label_must_match(self, batch_one_point, srs_small):
        assert batch_verify(batch_one_point, srs_small, Sha256Sponge())
        assert not batch_verify(batch_one_point, srs_small, Sha256Sponge(b"other"))

    def test_witness_count_mismatch_raises(self, batch_one_point, srs_small):
        tampered = dataclasses.replace(batch_one_point, opening=[])
        with pytest.raises(ValueError):
            batch_verify(tampered, srs_small)
