"""
커밋먼트 곡선 추상화
=====================

커밋먼트에 사용할 곡선 그룹이 제공해야 하는 능력(capability)을 정의한다.

  CommitmentCurve (기본)
    - to_coordinates / of_coordinates : 아핀 좌표 ↔ 점 (무한원점은 None)
    - add / sub / neg / mul / zero    : 그룹 연산
    - combine(g1, g2, x1, x2)         : 원소별 x1·g1[i] + x2·g2[i] (윈도우 MSM)
    - combine_one(g1, g2, x2)         : x1 = 1 특수화

  EndoCurve (선택적 확장)
    - endo_q, endo_r                  : 엔도모피즘 상수
    - combine_one_endo(g1, g2, chal)  : prechallenge를 바로 받는 가속 버전

엔도모피즘이 없는 곡선은 CommitmentCurve만 구현하면 된다.
EndoCurve의 기본 combine_one_endo는 prechallenge를 스칼라로 접은 뒤
combine_one으로 계산하며, 구체 곡선이 사다리 구현으로 덮어쓸 수 있다.

사용 예시:
    >>> from zkp.polycomm.curve import BN128
    >>> BN128.combine([G1], [G1], FR(2), FR(3))  # [5·G1]
"""

from py_ecc.fields import bn128_FQ as FQ

from zkp.polycomm import combine
from zkp.polycomm.field import (
    FR, ENDO_Q, ENDO_R,
    ec_add, ec_sub, ec_neg, ec_mul, is_on_curve,
)


class CommitmentCurve:
    """커밋먼트 곡선이 제공해야 하는 최소 연산 집합."""

    scalar_field = FR
    base_field = FQ

    def zero(self):
        """항등원 (무한원점)."""
        return None

    def to_coordinates(self, point):
        """점 → (x, y). 무한원점이면 None."""
        if point is None:
            return None
        x, y = point
        return (x, y)

    def of_coordinates(self, x, y):
        """(x, y) → 점. 곡선 위에 있는지는 검사하지 않는다."""
        return (self.base_field(x), self.base_field(y))

    def is_on_curve(self, point):
        return is_on_curve(point)

    def add(self, p1, p2):
        return ec_add(p1, p2)

    def sub(self, p1, p2):
        return ec_sub(p1, p2)

    def neg(self, point):
        return ec_neg(point)

    def mul(self, point, scalar):
        return ec_mul(point, scalar)

    def combine(self, g1, g2, x1, x2):
        """원소별 x1·g1[i] + x2·g2[i].

        Raises:
            ValueError: g1, g2 길이가 다를 때 (호출자 버그)
        """
        return combine.window_combine(g1, g2, x1, x2)

    def combine_one(self, g1, g2, x2):
        """x1 = 1 인 combine."""
        return combine.window_combine_one(g1, g2, x2)


class EndoCurve(CommitmentCurve):
    """값싼 엔도모피즘 φ를 가진 곡선.

    속성:
        endo_q: φ(x, y) = (endo_q·x, y) 의 베이스 필드 상수
        endo_r: φ(P) = endo_r·P 의 스칼라 필드 상수
    """

    endo_q = None
    endo_r = None

    def combine_one_endo(self, g1, g2, chal):
        """g1[i] + chal.to_field(endo_r)·g2[i].

        Args:
            chal: ScalarChallenge (접히기 전의 prechallenge)
        """
        return self.combine_one(g1, g2, chal.to_field(self.endo_r))


class BN128Curve(EndoCurve):
    """bn128 G1 그룹. 엔도모피즘 사다리로 combine_one_endo를 가속한다."""

    endo_q = ENDO_Q
    endo_r = ENDO_R

    def combine_one_endo(self, g1, g2, chal):
        return combine.endo_combine_one(g1, g2, chal.prechallenge, self.endo_q)

    def __repr__(self):
        return "BN128Curve()"


# 패키지 전반에서 쓰는 기본 곡선
BN128 = BN128Curve()
