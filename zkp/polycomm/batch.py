"""
일괄 결합 엔진 (Batch Combination Engine)
==========================================

여러 다항식의 (커밋먼트, 평가 테이블) 쌍을 두 개의 랜덤 스칼라로
하나의 검사로 묶는다. N개의 열기를 따로 검사하는 대신
한 번의 MSM 등식 검사로 끝낸다 (random linear combination).

**두 스칼라**:
  - polyscale: 다항식/청크 사이를 결합한다
  - evalscale: 한 청크 안에서 평가 점 사이를 결합한다

**평가 테이블 모양 (point-major)**:
  evaluations[point][chunk]: 예) vanilla PlonK의 ζ, ζω 두 점, 청크 2개:
      E = [(P_1(ζ), P_2(ζ)), (P_1(ζω), P_2(ζω))]

**연속 지수 규칙**:
  polyscale의 지수는 청크마다 하나씩 증가하며 다항식 경계에서 리셋되지 않는다.
  청크 2개짜리 다항식 두 개라면 지수는 0, 1 | 2, 3 이다.
  커밋먼트 쪽(combine_commitments)과 평가값 쪽(combine_evaluations,
  combined_inner_product)이 정확히 같은 지수열을 쓰도록 세 함수 모두
  PowerSequence 하나로 지수를 진행시킨다.

    combined_inner_product = Σ_k Σ_i polyscale^{(연속 인덱스)} · (Σ_j E_k[j][i] · evalscale^j)
"""

import logging
from dataclasses import dataclass
from typing import Any, List

from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import FR
from zkp.polycomm.polynomial import Polynomial

logger = logging.getLogger(__name__)


class PowerSequence:
    """1, base, base², ... 를 차례로 내어주는 누적 지수.

    예시:
        >>> powers = PowerSequence(FR(3))
        >>> next(powers), next(powers), next(powers)  # FR(1), FR(3), FR(9)
    """

    def __init__(self, base):
        self.base = base
        self.current = FR(1)

    def __iter__(self):
        return self

    def __next__(self):
        value = self.current
        self.current = self.current * self.base
        return value


@dataclass
class Evaluation:
    """한 다항식의 커밋먼트와 평가 테이블.

    속성:
        commitment: PolyComm (청크가 여러 개일 수 있음)
        evaluations: evaluations[point][chunk] (FR)
    """
    commitment: PolyComm
    evaluations: List[List[FR]]


@dataclass(frozen=True)
class BatchEvaluationProof:
    """Verifier가 소비하는 일괄 평가 증명 묶음.

    속성:
        sponge: 챌린지 유도에 쓴 스펀지 (이후 검사에서 계속 사용)
        evaluations: 다항식마다 하나의 Evaluation
        evaluation_points: 모든 Evaluation이 공유하는 평가 점
        polyscale: 다항식/청크 결합 스칼라
        evalscale: 평가 점 결합 스칼라
        opening: 외부 열기 증명 (불투명 값)
        combined_inner_product: 미리 계산한 결합 내적
    """
    sponge: Any
    evaluations: List[Evaluation]
    evaluation_points: List[FR]
    polyscale: FR
    evalscale: FR
    opening: Any
    combined_inner_product: FR


def combined_inner_product(polyscale, evalscale, polys):
    """여러 (청크) 다항식의 평가값을 하나의 스칼라로 결합한다.

    Args:
        polyscale: 청크 결합 스칼라
        evalscale: 평가 점 결합 스칼라
        polys: 다항식마다 point-major 테이블 polys[k][j][i]
               (j: 평가 점, i: 청크)

    Returns:
        FR: Σ_k Σ_i polyscale^{n} · (Σ_j polys[k][j][i] · evalscale^j),
            n은 다항식 경계를 넘어 연속으로 증가하는 청크 인덱스

    첫 행이 빈 다항식(평가 데이터 없음)은 합에서 완전히 빠지며
    지수도 소비하지 않는다.

    Raises:
        ValueError: 어떤 행이 첫 행보다 짧을 때
    """
    res = FR(0)
    powers = PowerSequence(polyscale)

    for evals_tr in polys:
        if not evals_tr or not evals_tr[0]:
            continue
        num_chunks = len(evals_tr[0])
        if any(len(row) < num_chunks for row in evals_tr):
            raise ValueError(
                f"평가 테이블의 행 길이가 첫 행({num_chunks})보다 짧습니다"
            )

        # 전치: 청크 i마다 [E[0][i], E[1][i], ...] (평가 점 순서)
        segments = [[row[i] for row in evals_tr] for i in range(num_chunks)]

        for segment in segments:
            term = Polynomial(segment).evaluate(evalscale)
            res = res + next(powers) * term

    return res


def combine_commitments(evaluations, scalars, points, polyscale, rand_base):
    """MSM 검사 입력을 만든다: scalars, points 리스트에 이어 붙인다.

    비어 있지 않은 커밋먼트의 각 청크마다
        scalars ← rand_base · polyscale^n
        points  ← 청크 점
    를 추가한다 (n은 연속 청크 인덱스). 커밋먼트 3개(각 1청크)라면
    scalars = [rand_base, rand_base·polyscale, rand_base·polyscale²].
    """
    powers = PowerSequence(polyscale)

    for evaluation in evaluations:
        if evaluation.commitment.is_empty():
            continue
        for chunk_point in evaluation.commitment.elems:
            scalars.append(rand_base * next(powers))
            points.append(chunk_point)

    logger.debug("combine_commitments: %d terms", len(points))


def combine_evaluations(evaluations, polyscale):
    """평가 점마다 청크 평가값을 polyscale로 결합한다.

    반환 리스트의 j번째 원소 = Σ (연속 인덱스 n에 대해) E_k[j][i] · polyscale^n
    즉, 결합 다항식 F = Σ polyscale^n · f_{k,i} 의 j번째 평가 점에서의 값이다.

    결과 길이는 첫 Evaluation의 평가 점 개수로 정해진다. 이후 테이블의
    평가 점 개수가 다르면 초과분은 잘려 나가며 (오류 아님), 경고를 남긴다.
    호출자가 같은 모양의 테이블을 넘겨야 한다.

    Raises:
        ValueError: 비어 있지 않은 커밋먼트의 평가 테이블에 평가 점이 없을 때
    """
    num_evals = len(evaluations[0].evaluations) if evaluations else 0
    acc = [FR(0)] * num_evals
    powers = PowerSequence(polyscale)

    for evaluation in evaluations:
        if evaluation.commitment.is_empty():
            continue
        table = evaluation.evaluations
        if not table:
            raise ValueError(
                "combine_evaluations: 커밋먼트에 청크가 있는데 평가 테이블이 비어 있습니다"
            )
        if len(table) != num_evals:
            logger.warning(
                "combine_evaluations: table has %d evaluation points, expected %d; truncating",
                len(table), num_evals,
            )
        # 모든 평가 점의 청크 수가 같다고 가정한다
        for chunk_idx in range(len(table[0])):
            xi = next(powers)
            for eval_pt_idx, row in enumerate(table[:num_evals]):
                acc[eval_pt_idx] = acc[eval_pt_idx] + row[chunk_idx] * xi

    return acc
