"""
KZG 일괄 열기 (참조 구현)
==========================

일괄 결합 엔진이 만든 하나의 문장을 실제로 검사하는 열기 증명의
생산자/소비자이다. 커밋먼트 계층 입장에서 열기 증명은 불투명한 값이며,
여기서는 평가 점마다 KZG witness 하나를 사용한다.

**결합 다항식**:
  모든 다항식의 모든 청크를 연속 지수로 묶는다:
      F(X) = Σ_n polyscale^n · f_n(X)
  청크 커밋먼트의 같은 결합이 F의 커밋먼트가 된다 (combine_commitments + MSM).

**평가 점 z_j마다**:
  y_j = F(z_j)                        (combine_evaluations의 j번째 값)
  W_j = commit((F(X) - y_j) / (X - z_j))
  검증: e(C_F - y_j·G1, G2) == e(W_j, [τ - z_j]₂)

**트랜스크립트 재생**:
  verifier는 커밋먼트와 평가 테이블을 prover와 같은 순서로 새 스펀지에 흡수해
  polyscale, evalscale을 다시 짜낸다 (absorb_batch). 주장한 평가값을 바꾸면
  챌린지도 바뀌므로, polyscale을 미리 알고 상쇄되는 변경을 넣을 수 없다.

**결합 내적 확인**:
  Σ_j evalscale^j · y_j == combined_inner_product

사용 예시:
    >>> batch = prepare_batch(Sha256Sponge(), polys, [zeta], srs)
    >>> batch_verify(batch, srs)  # True
"""

import logging

from zkp.polycomm.batch import (
    BatchEvaluationProof, Evaluation, PowerSequence,
    combine_commitments, combine_evaluations, combined_inner_product,
)
from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import (
    FR, G1, ENDO_R, ec_mul, ec_sub, ec_pairing,
)
from zkp.polycomm.polynomial import Polynomial, poly_div
from zkp.polycomm.srs import commit, commit_chunk, evaluate_chunks
from zkp.polycomm.transcript import Sha256Sponge, absorb_commitment, squeeze_challenge

logger = logging.getLogger(__name__)


def create_witness(poly, point, srs):
    """단일 청크 다항식의 열기 증명 π = commit((p(x) - p(z)) / (x - z)).

    Raises:
        ValueError: 나머지가 0이 아니거나 다항식이 SRS 한 청크를 넘을 때
    """
    if not isinstance(point, FR):
        point = FR(point)

    y = poly.evaluate(point)
    divisor = Polynomial([FR(0) - point, FR(1)])
    quotient, remainder = poly_div(poly - y, divisor)
    if not remainder.is_zero():
        raise ValueError("열기 증명 생성 실패: 나머지가 0이 아닙니다")

    return commit_chunk(quotient, srs)


def verify_opening(commitment, proof, point, evaluation, srs):
    """단일 점 KZG 검증: e(C - y·G1, G2) == e(π, [τ - z]₂).

    Args:
        commitment: G1 점 (단일 청크)
        proof: G1 점 π
        point: 평가 점 z
        evaluation: 주장하는 값 y

    Returns:
        bool
    """
    if not isinstance(point, FR):
        point = FR(point)
    if not isinstance(evaluation, FR):
        evaluation = FR(evaluation)

    g2, tau_g2 = srs.g2_powers
    tau_minus_z = ec_sub(tau_g2, ec_mul(g2, point))
    c_minus_y = ec_sub(commitment, ec_mul(G1, evaluation))

    return ec_pairing(g2, c_minus_y) == ec_pairing(tau_minus_z, proof)


def combined_polynomial(polys, polyscale, srs):
    """F(X) = Σ polyscale^n · f_n(X) (모든 청크, 연속 지수)."""
    powers = PowerSequence(polyscale)
    combined = Polynomial.zero()
    for poly in polys:
        for chunk in poly.chunks(srs.size):
            combined = combined + chunk * next(powers)
    return combined


def open_batch(polys, evaluation_points, polyscale, srs):
    """평가 점마다 결합 다항식 F의 witness를 만든다."""
    combined = combined_polynomial(polys, polyscale, srs)
    return [create_witness(combined, point, srs) for point in evaluation_points]


def absorb_batch(sponge, evaluations):
    """커밋먼트(다항식 순서)와 평가 테이블을 흡수하고 polyscale, evalscale을 짜낸다.

    prover와 verifier가 같은 순서로 호출해야 같은 챌린지가 나온다.
    """
    for evaluation in evaluations:
        absorb_commitment(sponge, evaluation.commitment)
    for evaluation in evaluations:
        for row in evaluation.evaluations:
            sponge.absorb_fr(row)

    polyscale = squeeze_challenge(ENDO_R, sponge)
    evalscale = squeeze_challenge(ENDO_R, sponge)
    return polyscale, evalscale


def prepare_batch(sponge, polys, evaluation_points, srs):
    """Prover 쪽: 커밋 → 흡수 → 챌린지 → 열기 → BatchEvaluationProof.

    트랜스크립트 순서:
      1. 다항식 순서대로 커밋먼트 청크 흡수
      2. 평가 테이블 흡수 (다항식 순서, 평가 점 순서, 청크 순서)
      3. polyscale, evalscale 순서로 squeeze
    """
    evaluation_points = [p if isinstance(p, FR) else FR(p) for p in evaluation_points]

    evaluations = []
    for poly in polys:
        table = [evaluate_chunks(poly, srs.size, point) for point in evaluation_points]
        evaluations.append(Evaluation(commit(poly, srs), table))

    polyscale, evalscale = absorb_batch(sponge, evaluations)

    opening = open_batch(polys, evaluation_points, polyscale, srs)
    cip = combined_inner_product(
        polyscale, evalscale, [e.evaluations for e in evaluations]
    )

    logger.debug(
        "prepared batch: %d polynomials, %d points", len(polys), len(evaluation_points)
    )
    return BatchEvaluationProof(
        sponge=sponge,
        evaluations=evaluations,
        evaluation_points=evaluation_points,
        polyscale=polyscale,
        evalscale=evalscale,
        opening=opening,
        combined_inner_product=cip,
    )


def batch_verify(batch, srs, sponge=None):
    """Verifier 쪽: 트랜스크립트를 재생하고 결합 커밋먼트와 결합 평가값을 검사한다.

    sponge는 prover가 prepare_batch에 넘긴 것과 같은 초기 상태의 새 스펀지여야
    한다 (기본값: Sha256Sponge()). batch에 실린 polyscale, evalscale은 믿지 않고
    재생한 값과 다르면 거부한다.

    Returns:
        bool: 결합 내적과 모든 평가 점의 페어링 검사가 통과하면 True
    """
    if len(batch.opening) != len(batch.evaluation_points):
        raise ValueError(
            f"witness 개수 {len(batch.opening)}가 평가 점 개수 "
            f"{len(batch.evaluation_points)}와 다릅니다"
        )

    if sponge is None:
        sponge = Sha256Sponge()
    polyscale, evalscale = absorb_batch(sponge, batch.evaluations)
    if polyscale != batch.polyscale or evalscale != batch.evalscale:
        logger.debug("challenges do not match the replayed transcript")
        return False

    scalars, points = [], []
    combine_commitments(batch.evaluations, scalars, points, polyscale, FR(1))
    combined = PolyComm.multi_scalar_mul([PolyComm([p]) for p in points], scalars)

    values = combine_evaluations(batch.evaluations, polyscale)

    expected = Polynomial(values).evaluate(evalscale)
    if expected != batch.combined_inner_product:
        logger.debug("combined inner product mismatch")
        return False

    for point, value, witness in zip(batch.evaluation_points, values, batch.opening):
        if not verify_opening(combined.elems[0], witness, point, value, srs):
            logger.debug("opening check failed at point %#x", int(point))
            return False
    return True
