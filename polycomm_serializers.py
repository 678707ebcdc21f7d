"""
커밋먼트 데이터 직렬화/역직렬화 헬퍼
======================================

JSON으로 저장/전송 가능한 형태로 커밋먼트 계층의 객체를 변환한다.
FR, G1, PolyComm, Evaluation, BatchEvaluationProof(스펀지 제외).

PolyComm은 청크 점의 순서 있는 리스트로만 직렬화한다.
예전 형식 {"unshifted": [...], "shifted": ...} 도 읽지만,
shifted 커밋먼트는 더 이상 지원하지 않으므로 값이 있으면 거부한다.
"""

from py_ecc.fields import bn128_FQ as FQ

from zkp.polycomm.batch import Evaluation
from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import FR, is_on_curve


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point

    Raises:
        ValueError: 곡선 위에 있지 않은 점
    """
    if data is None:
        return None
    point = (FQ(int(data[0])), FQ(int(data[1])))
    if not is_on_curve(point):
        raise ValueError(f"곡선 위에 있지 않은 점입니다: {data}")
    return point


# ─── PolyComm ───

def serialize_polycomm(comm):
    """PolyComm → {"elems": [...]}"""
    return {"elems": [serialize_g1(p) for p in comm.elems]}


def deserialize_polycomm(data):
    """dict → PolyComm

    {"elems": [...]} 또는 예전 형식 {"unshifted": [...], "shifted": null}.

    Raises:
        ValueError: shifted 값이 있거나 청크 리스트가 없을 때
    """
    if data.get("shifted") is not None:
        raise ValueError("shifted 커밋먼트는 더 이상 지원하지 않습니다")
    if "elems" in data:
        elems = data["elems"]
    elif "unshifted" in data:
        elems = data["unshifted"]
    else:
        raise ValueError("커밋먼트 청크 리스트가 없습니다")
    return PolyComm([deserialize_g1(p) for p in elems])


# ─── Evaluation ───

def serialize_evaluation(evaluation):
    """Evaluation → {"commitment": ..., "evaluations": [[str]]}"""
    return {
        "commitment": serialize_polycomm(evaluation.commitment),
        "evaluations": [
            [serialize_fr(v) for v in row] for row in evaluation.evaluations
        ],
    }


def deserialize_evaluation(data):
    """dict → Evaluation"""
    return Evaluation(
        commitment=deserialize_polycomm(data["commitment"]),
        evaluations=[
            [deserialize_fr(v) for v in row] for row in data["evaluations"]
        ],
    )


# ─── BatchEvaluationProof ───

def serialize_batch(batch):
    """BatchEvaluationProof → dict (스펀지는 포함하지 않음).

    opening은 G1 witness 리스트라고 가정한다.
    """
    return {
        "evaluations": [serialize_evaluation(e) for e in batch.evaluations],
        "evaluation_points": [serialize_fr(p) for p in batch.evaluation_points],
        "polyscale": serialize_fr(batch.polyscale),
        "evalscale": serialize_fr(batch.evalscale),
        "opening": [serialize_g1(w) for w in batch.opening],
        "combined_inner_product": serialize_fr(batch.combined_inner_product),
    }
