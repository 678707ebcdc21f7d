"""
Tests for the commitment codec (polycomm_serializers).
"""

import json

import pytest

from polycomm_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    serialize_polycomm, deserialize_polycomm,
    serialize_evaluation, deserialize_evaluation,
    serialize_batch,
)
from zkp.polycomm.batch import BatchEvaluationProof, Evaluation
from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import FR, G1, CURVE_ORDER


class TestScalarsAndPoints:

    def test_fr(self):
        assert deserialize_fr(serialize_fr(FR(CURVE_ORDER - 1))) == FR(CURVE_ORDER - 1)

    def test_g1(self, points):
        assert deserialize_g1(serialize_g1(points[0])) == points[0]

    def test_g1_infinity(self):
        assert serialize_g1(None) is None
        assert deserialize_g1(None) is None

    def test_g1_off_curve_rejected(self):
        with pytest.raises(ValueError):
            deserialize_g1(["1", "3"])


class TestPolyCommCodec:
    """PolyComm 직렬화 테스트."""

    def test_elems_form(self, points):
        comm = PolyComm([points[0], None, points[1]])
        data = json.loads(json.dumps(serialize_polycomm(comm)))
        assert list(data) == ["elems"]
        assert deserialize_polycomm(data) == comm

    def test_legacy_unshifted_form(self, points):
        data = {"unshifted": [serialize_g1(points[2])], "shifted": None}
        assert deserialize_polycomm(data) == PolyComm([points[2]])

    def test_shifted_form_rejected(self, points):
        data = {"unshifted": [serialize_g1(points[2])], "shifted": serialize_g1(G1)}
        with pytest.raises(ValueError):
            deserialize_polycomm(data)

    def test_missing_chunks_rejected(self):
        with pytest.raises(ValueError):
            deserialize_polycomm({})


class TestEvaluationCodec:

    def test_evaluation(self, points):
        evaluation = Evaluation(PolyComm([points[0], points[1]]), [[FR(1), FR(2)], [FR(3), FR(4)]])
        restored = deserialize_evaluation(serialize_evaluation(evaluation))
        assert restored.commitment == evaluation.commitment
        assert restored.evaluations == evaluation.evaluations

    def test_batch_omits_sponge(self, points):
        batch = BatchEvaluationProof(
            sponge=object(),
            evaluations=[Evaluation(PolyComm([points[0]]), [[FR(7)]])],
            evaluation_points=[FR(9)],
            polyscale=FR(3),
            evalscale=FR(5),
            opening=[points[1]],
            combined_inner_product=FR(7),
        )
        data = serialize_batch(batch)
        assert "sponge" not in data
        assert data["polyscale"] == "3"
        assert data["opening"] == [serialize_g1(points[1])]
        json.dumps(data)
