"""Abi documents used throughout the tests."""

# pylint: disable=invalid-name


def _param(name: str, solidity_type: str) -> dict:
    return {"internalType": solidity_type, "name": name, "type": solidity_type}


TOKEN_ABI: list[dict] = [
    {
        "inputs": [_param("tokenId", "uint256")],
        "name": "totalSupply",
        "outputs": [_param("", "uint256")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_param("account", "address"), _param("id", "uint256")],
        "name": "balanceOf",
        "outputs": [_param("", "uint256")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "name",
        "outputs": [_param("", "string")],
        "stateMutability": "pure",
        "type": "function",
    },
    {
        "inputs": [_param("tokenId", "uint256")],
        "name": "getTokenInfo",
        "outputs": [
            _param("owner", "address"),
            _param("price", "uint256"),
            _param("", "bool"),
            _param("uri", "string"),
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_param("account", "address"), _param("tokenId", "uint256"), _param("amount", "uint256")],
        "name": "mint",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_param("tokenId", "uint256"), _param("amount", "uint256"), _param("scout", "string")],
        "name": "buyToken",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "pause",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_param("", "string")],
        "name": "setBaseUri",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "operator", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "to", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "id", "type": "uint256"},
        ],
        "name": "TransferSingle",
        "type": "event",
    },
    {"inputs": [], "name": "InvalidToken", "type": "error"},
]
"""A token contract with queries, mutations, an event and a custom error."""

ECHO_ABI: list[dict] = [
    {
        "inputs": [_param("value", solidity_type)],
        "name": f"echo{suffix}",
        "outputs": [_param("", solidity_type)],
        "stateMutability": "pure",
        "type": "function",
    }
    for suffix, solidity_type in [
        ("Address", "address"),
        ("Uint", "uint256"),
        ("Int", "int256"),
        ("Bool", "bool"),
        ("String", "string"),
        ("Bytes", "bytes"),
    ]
]
"""A contract whose functions return their input unchanged."""

TUPLE_ABI: list[dict] = [
    {
        "inputs": [
            {
                "components": [_param("amount", "uint256"), _param("recipient", "address")],
                "internalType": "struct Vesting.Stream[]",
                "name": "streams",
                "type": "tuple[]",
            }
        ],
        "name": "createStreams",
        "outputs": [_param("ids", "uint256[]")],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
"""A contract with struct array inputs and array outputs."""
