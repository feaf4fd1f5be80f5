from enum import Enum


class Chain(str, Enum):
    """Supported networks. Values lowercase to match RPC/API conventions."""

    ETHEREUM = "ethereum"
    SEPOLIA = "sepolia"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
    POLYGON = "polygon"
    BASE = "base"
