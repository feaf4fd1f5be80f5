"""Static sector taxonomy used for allocation breakdowns."""

OTHER_SECTOR = "Other"

# Sector name → member symbols (upper case)
SECTORS: dict[str, frozenset[str]] = {
    "Layer 1 Blockchains": frozenset({"ETH", "WETH", "BTC", "WBTC", "SOL", "ADA", "DOT", "AVAX"}),
    "DeFi Protocols": frozenset({"UNI", "AAVE", "COMP", "CRV", "BAL", "SUSHI"}),
    "Stablecoins": frozenset({"USDC", "USDT", "DAI", "BUSD", "FRAX"}),
    "Meme Coins": frozenset({"DOGE", "SHIB", "PEPE", "FLOKI"}),
    "Infrastructure": frozenset({"LINK", "MATIC", "ATOM", "NEAR", "FTM"}),
}


def sector_of(symbol: str) -> str:
    upper = symbol.upper()
    for sector, members in SECTORS.items():
        if upper in members:
            return sector
    return OTHER_SECTOR
