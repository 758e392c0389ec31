"""PriceCompare - 멀티 마켓플레이스 가격 비교 서비스"""

__version__ = "1.0.0"
