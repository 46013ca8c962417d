"""Static defaults for trustlinker."""

TEST_MODE = "test"
PRODUCTION_MODE = "production"

TEST_CHAINS = (
    "goerli",
    "bsc-testnet",
    "fuji",
    "mumbai",
    "arbitrum-goerli",
    "optimism-goerli",
    "fantom-testnet",
)

CHAINS = (
    "ethereum",
    "bsc",
    "avalanche",
    "polygon",
    "arbitrum",
    "optimism",
    "fantom",
)

# Position of the hub network inside the active set.
DEFAULT_SOURCE_INDEX = 3

DEFAULT_TOOL = "npx hardhat"
DEFAULT_LINK_SUBCOMMAND = "setTrustedRemote"

# Shell convention for "command not found".
LAUNCH_FAILURE_EXIT_CODE = 127

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2
