"""
챌린지 다항식 B(x)
==================

IPA 접기(folding) 라운드의 챌린지 c₀, ..., c_{k-1} 로부터 유도되는 다항식

    B(x) = Π_{i=0}^{k-1} (1 + cᵢ · x^{2^{k-1-i}})

를 다룬다. (https://eprint.iacr.org/2020/499 부록 A.2, step 8)

  - b_poly: 한 점에서의 값. x, x², x⁴, ... 를 연속 제곱으로 구해 곱한다. O(k).
  - b_poly_coefficients: 길이 2^k 계수 벡터.
    텐서곱 전개의 자기유사 구조를 이용해 계수당 곱셈 한 번으로 채운다:
    인덱스 i의 최상위 비트를 떼어 낸 계수에 해당 라운드 챌린지를 곱한다.

예시 (k = 2):
    B(x) = (1 + c₀x²)(1 + c₁x) = 1 + c₁x + c₀x² + c₀c₁x³
    b_poly_coefficients([c₀, c₁]) == [1, c₁, c₀, c₀c₁]
"""

from zkp.polycomm.commitment import product
from zkp.polycomm.field import FR


def b_poly(chals, x):
    """B(x)를 계수 전개 없이 평가한다."""
    if not isinstance(x, FR):
        x = FR(x)
    k = len(chals)

    pow_twos = [x]
    for i in range(1, k):
        pow_twos.append(pow_twos[i - 1] * pow_twos[i - 1])

    return product(FR(1) + chals[i] * pow_twos[k - 1 - i] for i in range(k))


def b_poly_coefficients(chals):
    """B(x)의 계수 벡터 [s₀, s₁, ..., s_{2^k - 1}].

    s_i = s_{i - 2^{m}} · chals[k - 1 - m]   (2^m ≤ i < 2^{m+1})

    chals가 비어 있으면 [1].
    """
    rounds = len(chals)
    s_length = 1 << rounds
    s = [FR(1)] * s_length
    k = 0
    pow_ = 1
    for i in range(1, s_length):
        if i == pow_:
            k += 1
            pow_ <<= 1
        s[i] = s[i - (pow_ >> 1)] * chals[rounds - 1 - (k - 1)]
    return s
