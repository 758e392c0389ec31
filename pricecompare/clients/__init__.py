"""마켓플레이스 업스트림 클라이언트.

공개 API는 이 파일에서만 export합니다.
"""

from .base import MarketplaceClient
from .http_client import SharedHttpClient
from .ebay_client import EbayClient
from .etsy_client import EtsyClient
from .aliexpress_client import AliExpressClient, EndpointCandidate, ENDPOINT_CANDIDATES

__all__ = [
    "MarketplaceClient",
    "SharedHttpClient",
    "EbayClient",
    "EtsyClient",
    "AliExpressClient",
    "EndpointCandidate",
    "ENDPOINT_CANDIDATES",
]
