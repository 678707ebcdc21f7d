"""
다항식 커밋먼트 값 (PolyComm)
===============================

다항식 하나에 대한 커밋먼트는 G1 점의 순서 있는 리스트이다.

**청크(chunk) 분할**:
  다항식의 계수 개수가 SRS 크기 d를 넘으면 계수를 d개씩 잘라
  f(X) = f₀(X) + X^d·f₁(X) + X^{2d}·f₂(X) + ...
  각 fⱼ를 따로 커밋한다. 따라서 커밋먼트의 청크 수는 ceil(계수 개수 / d)이다.

**준동형 성질 (Homomorphism)**:
  commit(f + g) = commit(f) + commit(g)   (청크별 덧셈)
  commit(s·f)   = s · commit(f)           (모든 청크에 같은 스칼라)

  청크 수가 다른 두 커밋먼트도 더할 수 있다: 짧은 쪽의 없는 청크는
  항등원으로 취급되어 긴 쪽의 청크가 그대로 통과한다.

**shift_scalar**:
  회로 안의 스칼라 곱셈 가젯은 g·x 대신 g·(x + 2^n) (또는 g·(2x + 2^n + 1))을
  계산하므로, 회로 밖에서 만든 스칼라를 넘기기 전에 역함수를 적용해야 한다.
"""

import logging
from dataclasses import dataclass

from zkp.polycomm.combine import window_msm
from zkp.polycomm.curve import BN128
from zkp.polycomm.field import FR, FIELD_MODULUS

logger = logging.getLogger(__name__)


class PolyComm:
    """다항식 커밋먼트: 청크별 G1 점의 리스트.

    elems에는 보통 G1 점이 들어가지만, map/zip의 결과처럼
    임의의 값(예: 블라인딩 스칼라)을 담는 컨테이너로도 쓰인다.

    속성:
        elems: 청크 리스트 (인덱스 0부터 차수가 낮은 청크)
        curve: 그룹 연산을 제공하는 CommitmentCurve

    예시:
        >>> c = PolyComm([ec_mul(G1, 3)])
        >>> (c + c).scale(FR(2)) == PolyComm([ec_mul(G1, 12)])  # True
    """

    def __init__(self, elems, curve=None):
        self.elems = list(elems)
        self.curve = curve if curve is not None else BN128

    @classmethod
    def identity(cls, curve=None):
        """덧셈 항등원: 무한원점 하나를 담은 1-청크 커밋먼트."""
        curve = curve if curve is not None else BN128
        return cls([curve.zero()], curve)

    def __len__(self):
        return len(self.elems)

    def __iter__(self):
        return iter(self.elems)

    def is_empty(self):
        return not self.elems

    def map(self, f):
        """각 청크에 f를 적용한 새 PolyComm."""
        return PolyComm([f(e) for e in self.elems], self.curve)

    def zip(self, other):
        """청크 수가 같은 두 PolyComm을 (a, b) 쌍의 PolyComm으로 묶는다.

        Raises:
            ValueError: 청크 수가 다를 때
        """
        if len(self.elems) != len(other.elems):
            raise ValueError(
                f"청크 수가 다른 커밋먼트는 zip할 수 없습니다: "
                f"{len(self.elems)} != {len(other.elems)}"
            )
        return PolyComm(list(zip(self.elems, other.elems)), self.curve)

    def _pointwise(self, other, op):
        n1, n2 = len(self.elems), len(other.elems)
        elems = []
        for i in range(max(n1, n2)):
            if i < n1 and i < n2:
                elems.append(op(self.elems[i], other.elems[i]))
            elif i < n1:
                elems.append(self.elems[i])
            else:
                elems.append(other.elems[i])
        return PolyComm(elems, self.curve)

    def __add__(self, other):
        """청크별 덧셈. 긴 쪽의 남는 청크는 그대로 통과한다."""
        return self._pointwise(other, self.curve.add)

    def __sub__(self, other):
        """청크별 뺄셈. 남는 청크는 (부호를 바꾸지 않고) 그대로 통과한다."""
        return self._pointwise(other, self.curve.sub)

    def scale(self, scalar):
        """모든 청크에 같은 스칼라를 곱한다: scalar · commit(f)."""
        return PolyComm([self.curve.mul(g, scalar) for g in self.elems], self.curve)

    def __eq__(self, other):
        if not isinstance(other, PolyComm):
            return NotImplemented
        return self.elems == other.elems

    def __repr__(self):
        return f"PolyComm({len(self.elems)} chunks)"

    @staticmethod
    def multi_scalar_mul(comms, scalars):
        """커밋먼트들과 스칼라들의 다중 스칼라 곱셈.

        결과의 j번째 청크 = Σᵢ scalars[i] · comms[i].elems[j]
        j번째 청크가 없는 커밋먼트는 그 합에서 빠진다.

        Args:
            comms: PolyComm 리스트
            scalars: FR 리스트 (comms와 같은 길이)

        Returns:
            PolyComm: 가장 긴 커밋먼트와 같은 청크 수.
                      둘 다 비어 있으면 항등원 1-청크 커밋먼트.

        Raises:
            ValueError: comms와 scalars의 길이가 다를 때
        """
        if len(comms) != len(scalars):
            raise ValueError(
                f"커밋먼트 개수 {len(comms)}와 스칼라 개수 {len(scalars)}가 다릅니다"
            )
        if not comms:
            return PolyComm.identity()

        curve = comms[0].curve
        num_chunks = max(len(c.elems) for c in comms)
        elems = []
        for chunk in range(num_chunks):
            points = []
            chunk_scalars = []
            for comm, scalar in zip(comms, scalars):
                if chunk < len(comm.elems):
                    points.append(comm.elems[chunk])
                    chunk_scalars.append(scalar)
            elems.append(window_msm(points, chunk_scalars))
        logger.debug("multi_scalar_mul: %d commitments, %d chunks", len(comms), num_chunks)
        return PolyComm(elems, curve)


@dataclass
class BlindedCommitment:
    """블라인딩 인자와 함께 보관하는 커밋먼트.

    blinders는 청크마다 하나의 FR 스칼라를 담은 PolyComm이다.
    """
    commitment: PolyComm
    blinders: PolyComm


def shift_scalar(x, scalar_field=FR, base_modulus=FIELD_MODULUS):
    """회로 내 스칼라 곱셈 가젯 규약에 맞게 스칼라를 보정한다.

    n = 스칼라 필드 위수의 비트 길이라 할 때, 가젯은
      - 스칼라 필드가 베이스 필드보다 작으면 g·(2x + 2^n + 1)
      - 그렇지 않으면 g·(x + 2^n)
    을 계산한다. 이 함수는 각각의 역함수
      (x - (2^n + 1)) / 2   또는   x - 2^n
    를 적용한다. 실패하지 않는 전함수(total function)이다.

    Args:
        x: 스칼라 필드 원소 (정수도 허용)
        scalar_field: 스칼라 필드 클래스 (기본 FR)
        base_modulus: 베이스 필드 위수 (정수로 비교)

    예시 (bn128은 r < q):
        >>> y = shift_scalar(FR(5))
        >>> FR(2) * y + FR(2) ** 254 + FR(1) == FR(5)  # True
    """
    if not isinstance(x, scalar_field):
        x = scalar_field(x)
    scalar_modulus = scalar_field.field_modulus
    two_pow = scalar_field(2) ** scalar_modulus.bit_length()
    if scalar_modulus < base_modulus:
        return (x - (two_pow + scalar_field(1))) / scalar_field(2)
    return x - two_pow


def product(xs):
    """필드 원소들의 곱. 빈 입력이면 1."""
    result = FR(1)
    for x in xs:
        result = result * x
    return result


def inner_prod(xs, ys):
    """Σ xs[i]·ys[i]. 짧은 쪽 길이까지만 더한다."""
    result = FR(0)
    for x, y in zip(xs, ys):
        result = result + x * y
    return result
