"""
커밋먼트 계층 공용 파라미터
===========================

모듈 전역 상수로 관리한다. 값을 바꾸면 Prover와 Verifier가
서로 다른 챌린지를 얻으므로 양쪽이 반드시 같은 값을 써야 한다.
"""

# squeeze 한 번으로 얻는 prechallenge 비트 수 (엔도모피즘 폴딩 길이)
CHALLENGE_LENGTH_IN_BITS = 128

# 고정 윈도우 MSM의 윈도우 크기 (비트)
WINDOW_BITS = 4

# 트랜스크립트 도메인 분리 레이블
TRANSCRIPT_LABEL = b"polycomm"
