"""Minimal ABIs for contracts the harness talks to without a saved deployment."""

ERC20_ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
]

COMPTROLLER_ABI = [
    {
        "type": "function",
        "name": "callOnExtension",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_extension", "type": "address"},
            {"name": "_actionId", "type": "uint256"},
            {"name": "_callArgs", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "buyShares",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_investmentAmount", "type": "uint256"},
            {"name": "_minSharesQuantity", "type": "uint256"},
        ],
        "outputs": [{"name": "sharesReceived_", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "getDenominationAsset",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "denominationAsset_", "type": "address"}],
    },
    {
        "type": "function",
        "name": "getVaultProxy",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "vaultProxy_", "type": "address"}],
    },
]

VAULT_ABI = [
    {
        "type": "function",
        "name": "getAccessor",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "accessor_", "type": "address"}],
    },
    {
        "type": "function",
        "name": "getOwner",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "owner_", "type": "address"}],
    },
]

EXTERNAL_POSITION_PROXY_ABI = [
    {
        "type": "function",
        "name": "getExternalPositionType",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "externalPositionType_", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "getVaultProxy",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "vaultProxy_", "type": "address"}],
    },
    {
        "type": "function",
        "name": "receiveCallFromVault",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_data", "type": "bytes"}],
        "outputs": [],
    },
]
