"""Constants and mappings for the custody wallet."""

from .exceptions import UnsupportedChainError

# Chain ID to Fireblocks asset ID mapping
# https://developers.fireblocks.com/reference/get_supported-assets
ASSET_ID_BY_CHAIN = {
    1: "ETH",  # mainnet
    5: "ETH_TEST3",  # goerli
    17000: "ETH_TEST6",  # holesky
    11155111: "ETH_TEST5",  # sepolia
}

WEI_PER_GWEI = 10**9
WEI_PER_ETHER = 10**18

# Whitelist entry status accepted for destinations
APPROVED_STATUS = "APPROVED"


def get_asset_id(chain_id: int) -> str:
    """Get the custody asset ID for a chain.

    Args:
        chain_id: EVM chain ID (e.g., 1, 17000)

    Returns:
        Custody asset ID

    Raises:
        UnsupportedChainError: If the chain has no known asset
    """
    try:
        return ASSET_ID_BY_CHAIN[int(chain_id)]
    except KeyError:
        raise UnsupportedChainError(chain_id) from None
