"""Constants shared by the deployment scripts and the test harness."""

from enum import IntEnum

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_NODE_URL = "http://localhost:8545"

# Well-known development mnemonic used by local Hardhat/Anvil nodes
TEST_MNEMONIC = "test test test test test test test test test test test junk"

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_RECEIPT_TIMEOUT = 120.0

# Gas limit used when sending calls through the external position manager
EXTERNAL_POSITION_CALL_GAS = 8_000_000

# EIP-170 deployed bytecode limit
MAX_CONTRACT_SIZE = 24_576

CONFIG_DEPLOYMENT_NAME = "Config"


class Network(IntEnum):
    """Chain ids of the networks the protocol is released on."""

    HOMESTEAD = 1
    GOERLI = 5
    MATIC = 137
    HARDHAT = 31337
    MUMBAI = 80001
