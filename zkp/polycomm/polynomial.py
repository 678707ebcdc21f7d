"""
청크 다항식
============

커밋먼트 계층이 다루는 FR 위의 계수 표현 다항식.
p(x) = c₀ + c₁·x + c₂·x² + ...

쓰임새:
  - chunks: SRS 크기 단위로 자른 청크 fⱼ (커밋먼트의 청크 하나에 대응)
  - evaluate: 청크 평가값, 평가 테이블의 한 열을 evalscale로 접기 (Horner)
  - 결합 다항식 F = Σ polyscale^n · fₙ (청크 덧셈, 스칼라곱)
  - poly_div: 열기 증명의 몫 (p(x) - y) / (x - z)

사용 예시:
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # FR(17)
    >>> p.chunks(2)        # [1 + 2x, 3]
"""

from zkp.polycomm.field import FR


def _as_fr(value):
    return value if isinstance(value, FR) else FR(value)


class Polynomial:
    """coeffs = [c₀, c₁, ...]. 최고차의 0은 잘라내며 영 다항식은 [0]."""

    def __init__(self, coeffs=()):
        coeffs = [_as_fr(c) for c in coeffs]
        while coeffs and coeffs[-1] == FR(0):
            coeffs.pop()
        self.coeffs = coeffs or [FR(0)]

    @classmethod
    def zero(cls):
        return cls()

    @property
    def degree(self):
        return len(self.coeffs) - 1

    def is_zero(self):
        return self.coeffs == [FR(0)]

    def evaluate(self, point):
        """Horner: c₀ + z(c₁ + z(c₂ + ...))."""
        point = _as_fr(point)
        acc = FR(0)
        for coeff in reversed(self.coeffs):
            acc = acc * point + coeff
        return acc

    def chunks(self, size):
        """size개 계수 단위의 청크 리스트. p(x) = Σⱼ x^{j·size} · fⱼ(x).

        Raises:
            ValueError: size < 1
        """
        if size < 1:
            raise ValueError(f"청크 크기는 1 이상이어야 합니다: {size}")
        return [
            Polynomial(self.coeffs[start:start + size])
            for start in range(0, len(self.coeffs), size)
        ]

    def _combine(self, other, sign):
        if not isinstance(other, Polynomial):
            other = Polynomial([other])
        length = max(len(self.coeffs), len(other.coeffs))
        padded_self = self.coeffs + [FR(0)] * (length - len(self.coeffs))
        padded_other = other.coeffs + [FR(0)] * (length - len(other.coeffs))
        return Polynomial([a + sign * b for a, b in zip(padded_self, padded_other)])

    def __add__(self, other):
        return self._combine(other, FR(1))

    def __sub__(self, other):
        return self._combine(other, FR(-1))

    def __mul__(self, scalar):
        """스칼라곱만 지원한다 (청크 결합에 필요한 연산)."""
        scalar = _as_fr(scalar)
        return Polynomial([c * scalar for c in self.coeffs])

    def __eq__(self, other):
        return isinstance(other, Polynomial) and self.coeffs == other.coeffs


def poly_div(a, b):
    """긴 나눗셈 a = b·q + r. (q, r)을 반환한다.

    Raises:
        ValueError: b가 영 다항식일 때
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    rem = list(a.coeffs)
    shift = len(rem) - len(b.coeffs)
    if shift < 0:
        return Polynomial.zero(), Polynomial(rem)

    lead_inv = FR(1) / b.coeffs[-1]
    quot = [FR(0)] * (shift + 1)
    for k in range(shift, -1, -1):
        q_k = rem[k + b.degree] * lead_inv
        quot[k] = q_k
        for offset, d in enumerate(b.coeffs):
            rem[k + offset] = rem[k + offset] - q_k * d
    return Polynomial(quot), Polynomial(rem)
