"""Source verification of deployments on Etherscan-compatible explorers."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import requests
from eth_abi import encode as abi_encode

from ..chain.artifacts import Artifact
from ..constants import DEFAULT_REQUEST_TIMEOUT, Network
from ..exceptions import ConfigurationError, NetworkError, VerificationError
from .deployments import Deployment

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_POLLS = 24

EXPLORER_APIS = {
    int(Network.HOMESTEAD): "https://api.etherscan.io/api",
    int(Network.GOERLI): "https://api-goerli.etherscan.io/api",
    int(Network.MATIC): "https://api.polygonscan.com/api",
    int(Network.MUMBAI): "https://api-testnet.polygonscan.com/api",
}

_ALREADY_VERIFIED = ("already verified",)
_PENDING = ("pending in queue", "in progress")


def api_url_for_chain(chain_id: int) -> str:
    try:
        return EXPLORER_APIS[int(chain_id)]
    except KeyError:
        raise ConfigurationError(
            f"No block explorer API known for chain {chain_id}",
            field="chain_id",
            value=chain_id,
        ) from None


def _abi_type(param: Mapping[str, Any]) -> str:
    kind = str(param["type"])
    if kind.startswith("tuple"):
        inner = ",".join(_abi_type(component) for component in param.get("components", []))
        return f"({inner}){kind[len('tuple'):]}"
    return kind


def encode_constructor_args(abi: Sequence[Mapping[str, Any]], args: Sequence[Any]) -> str:
    """ABI-encode constructor ``args`` as the unprefixed hex the explorer expects."""

    constructor = next((entry for entry in abi if entry.get("type") == "constructor"), None)
    inputs = list(constructor.get("inputs", [])) if constructor else []
    if len(inputs) != len(args):
        raise VerificationError(
            "Constructor argument count does not match the ABI",
            details={"expected": len(inputs), "received": len(args)},
        )
    if not inputs:
        return ""

    types = [_abi_type(param) for param in inputs]
    values = [_coerce_arg(kind, value) for kind, value in zip(types, args)]
    return abi_encode(types, values).hex()


def _coerce_arg(kind: str, value: Any) -> Any:
    # Deployment records store bytes as hex strings
    if kind.startswith("bytes") and isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if kind.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 0)
    return value


class EtherscanVerifier:
    """Submit standard-json-input verifications and wait for their result."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str,
        session: requests.Session | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_polls: int = DEFAULT_MAX_POLLS,
    ) -> None:
        if not api_key:
            raise ConfigurationError("An Etherscan API key is required", field="api_key")
        self._api_key = api_key
        self._api_url = api_url
        self._session = session or requests.Session()
        self._request_timeout = request_timeout
        self._poll_interval = poll_interval
        self._max_polls = max_polls

    def verify(
        self,
        deployment: Deployment,
        artifact: Artifact,
        build_info: Mapping[str, Any],
    ) -> bool:
        """Verify ``deployment``; returns False if it was already verified."""

        if artifact.source_name is None:
            raise VerificationError(
                "Artifact does not record its source file", contract=deployment.name
            )

        payload = {
            "apikey": self._api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": deployment.address,
            "sourceCode": json.dumps(build_info["input"]),
            "codeformat": "solidity-standard-json-input",
            "contractname": f"{artifact.source_name}:{artifact.contract_name}",
            "compilerversion": f"v{build_info['solcLongVersion']}",
            # Etherscan's own spelling
            "constructorArguements": encode_constructor_args(deployment.abi, deployment.args),
        }

        logger.info("Submitting %s at %s for verification", deployment.name, deployment.address)
        result = self._post(payload)
        status, message = str(result.get("status")), str(result.get("result", ""))
        if status != "1":
            if any(marker in message.lower() for marker in _ALREADY_VERIFIED):
                logger.info("%s is already verified", deployment.name)
                return False
            raise VerificationError(
                f"Verification request for {deployment.name} was rejected: {message}",
                contract=deployment.name,
                details={"response": dict(result)},
            )

        self._wait_for_result(deployment.name, guid=message)
        return True

    def _wait_for_result(self, name: str, *, guid: str) -> None:
        for attempt in range(self._max_polls):
            time.sleep(self._poll_interval)
            result = self._get(
                {
                    "apikey": self._api_key,
                    "module": "contract",
                    "action": "checkverifystatus",
                    "guid": guid,
                }
            )
            message = str(result.get("result", ""))
            lowered = message.lower()

            if any(marker in lowered for marker in _PENDING):
                logger.debug(
                    "Verification of %s pending (attempt %s/%s)", name, attempt + 1, self._max_polls
                )
                continue
            if str(result.get("status")) == "1" or any(
                marker in lowered for marker in _ALREADY_VERIFIED
            ):
                logger.info("Verified %s: %s", name, message)
                return
            raise VerificationError(
                f"Verification of {name} failed: {message}",
                contract=name,
                details={"guid": guid, "response": dict(result)},
            )

        raise VerificationError(
            f"Timed out waiting for verification of {name} after "
            f"{self._max_polls * self._poll_interval:.0f} seconds",
            contract=name,
            details={"guid": guid, "polls": self._max_polls},
        )

    def _post(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return self._json(
            lambda: self._session.post(self._api_url, data=data, timeout=self._request_timeout)
        )

    def _get(self, params: Mapping[str, Any]) -> Mapping[str, Any]:
        return self._json(
            lambda: self._session.get(self._api_url, params=params, timeout=self._request_timeout)
        )

    def _json(self, send: Callable[[], requests.Response]) -> Mapping[str, Any]:
        try:
            response = send()
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise NetworkError(
                f"Explorer request failed: {exc}",
                endpoint=self._api_url,
                details={"error": str(exc)},
            ) from exc
        except ValueError as exc:
            raise NetworkError(
                "Explorer returned a non-JSON response",
                endpoint=self._api_url,
                details={"error": str(exc)},
            ) from exc

        if not isinstance(payload, Mapping):
            raise VerificationError(
                "Explorer response is not a JSON object", details={"response": payload}
            )
        return payload
