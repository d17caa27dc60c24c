"""
Sui JSON-RPC client — ownership source for holder assets.

API:   https://docs.sui.io/sui-api-ref
Method used:
  suix_getOwnedObjects(owner, query, cursor, limit)
    query = {"filter": null, "options": {"showContent": true, "showType": true}}
    -> {"data": [{"data": {...object...}}], "nextCursor": "...", "hasNextPage": bool}

Lifecycle:
  The client is constructed once (CLI entry / service start) and injected into
  whichever component needs holdings.  Pass an existing ``httpx.Client`` to
  share connection pooling or to plug in a mock transport in tests; a client
  created here is closed by ``close()`` / the context manager.

Filtering:
  An object is treated as a collectible when its content is a ``moveObject``
  and its Move type contains "NFT", "nft" or "0x".  ``name``, ``description``
  and ``image_url`` come from the object's fields; every other primitive field
  is kept as a raw trait.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Optional

import httpx
from pydantic import ValidationError

from trait_affinity.ingestion.errors import OwnershipLookupError
from trait_affinity.models.asset import Asset

logger = logging.getLogger(__name__)

DEFAULT_RPC_URLS: dict[str, str] = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet":  "https://fullnode.devnet.sui.io:443",
}

_DISPLAY_FIELDS = frozenset({"name", "description", "image_url"})


class SuiClient:
    """Fetches a holder's collectibles from a Sui full node.

    Usage::

        with SuiClient(DEFAULT_RPC_URLS["testnet"]) as client:
            assets = client.fetch_owned_assets("0x1234...")

    Attributes:
        rpc_url:    Full-node JSON-RPC endpoint.
        page_limit: Objects requested per page.
        max_pages:  Upper bound on pages followed per holder.
    """

    NFT_TYPE_MARKERS: ClassVar[tuple[str, ...]] = ("NFT", "nft", "0x")

    def __init__(
        self,
        rpc_url:     str,
        http_client: Optional[httpx.Client] = None,
        page_limit:  int = 50,
        max_pages:   int = 10,
        timeout:     float = 30.0,
    ) -> None:
        self.rpc_url    = rpc_url
        self.page_limit = page_limit
        self.max_pages  = max_pages
        self._owns_http = http_client is None
        self._http      = http_client or httpx.Client(timeout=timeout)
        self._request_id = 0

    def __enter__(self) -> "SuiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # ── Ownership source ───────────────────────────────────────────────────────

    def fetch_owned_assets(self, holder_id: str) -> list[Asset]:
        """Return every collectible owned by ``holder_id``.

        Raises:
            OwnershipLookupError: On transport errors, JSON-RPC errors or
                malformed responses.
        """
        logger.info("Fetching owned objects for holder=%s", holder_id[:10])

        assets: list[Asset] = []
        cursor: Optional[str] = None

        for page in range(self.max_pages):
            result = self._call(
                holder_id,
                "suix_getOwnedObjects",
                [
                    holder_id,
                    {"filter": None, "options": {"showContent": True, "showType": True}},
                    cursor,
                    self.page_limit,
                ],
            )
            try:
                entries = result["data"]
                has_next = bool(result.get("hasNextPage", False))
                cursor = result.get("nextCursor")
            except (KeyError, TypeError, AttributeError) as exc:
                raise OwnershipLookupError(holder_id, "malformed owned-objects page") from exc
            if not isinstance(entries, list):
                raise OwnershipLookupError(holder_id, "malformed owned-objects page: data is not a list")

            for entry in entries:
                try:
                    asset = self._parse_object(entry)
                except ValidationError as exc:
                    raise OwnershipLookupError(
                        holder_id, f"malformed owned object: {exc.error_count()} invalid field(s)"
                    ) from exc
                if asset is not None:
                    assets.append(asset)

            if not has_next or cursor is None:
                break
        else:
            logger.warning(
                "Stopped after %d pages for holder=%s; results may be partial.",
                self.max_pages, holder_id[:10],
            )

        logger.info("Found %d collectibles for holder=%s", len(assets), holder_id[:10])
        return assets

    # ── Transport ──────────────────────────────────────────────────────────────

    def _call(self, holder_id: str, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        try:
            resp = self._http.post(self.rpc_url, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise OwnershipLookupError(holder_id, f"{method} request failed: {exc}") from exc
        except ValueError as exc:
            raise OwnershipLookupError(holder_id, f"{method} returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise OwnershipLookupError(holder_id, f"{method} returned a non-object body")
        if body.get("error"):
            message = body["error"].get("message") if isinstance(body["error"], dict) else body["error"]
            raise OwnershipLookupError(holder_id, f"{method} error: {message}")
        if "result" not in body:
            raise OwnershipLookupError(holder_id, f"{method} response has no result")
        return body["result"]

    # ── Response parser ────────────────────────────────────────────────────────

    def _parse_object(self, entry: Any) -> Optional[Asset]:
        """Convert one owned-object entry to an Asset, or ``None`` if skipped."""
        data = entry.get("data") if isinstance(entry, dict) else None
        if not isinstance(data, dict):
            return None

        content = data.get("content")
        if not isinstance(content, dict) or content.get("dataType") != "moveObject":
            return None

        move_type = data.get("type") or content.get("type") or ""
        if not isinstance(move_type, str) or not any(
            marker in move_type for marker in self.NFT_TYPE_MARKERS
        ):
            return None

        object_id = data.get("objectId")
        if not object_id:
            return None

        fields = content.get("fields")
        if not isinstance(fields, dict):
            fields = {}
        traits = {
            key: value
            for key, value in fields.items()
            if key not in _DISPLAY_FIELDS and isinstance(value, (str, int, float, bool))
        }

        return Asset(
            object_id=object_id,
            name=_optional_str(fields.get("name")),
            description=_optional_str(fields.get("description")),
            image_url=_optional_str(fields.get("image_url")),
            collection=move_type,
            traits=traits,
        )


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
