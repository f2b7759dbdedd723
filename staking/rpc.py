"""JSON-RPC client with node failover, read retries and rate limiting."""
from __future__ import annotations

import itertools
import time
from typing import Any, Dict, List, Optional

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed


class RPCError(Exception):
    """Raised when the RPC node returns an error."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


class RPCClient:
    def __init__(
        self,
        rpc_nodes: List[Dict[str, str]],
        logger,
        retry_attempts: int = 3,
        retry_wait_seconds: int = 1,
        timeout_seconds: int = 10,
        rate_limit_per_sec: Optional[float] = None,
    ) -> None:
        if not rpc_nodes:
            raise ValueError("At least one RPC node must be configured")
        self.nodes = rpc_nodes
        self.logger = logger
        self.index = 0
        self.timeout = timeout_seconds
        self.retry_attempts = max(1, retry_attempts)
        self.retry_wait_seconds = max(0, retry_wait_seconds)
        self.rate_limit_per_sec = rate_limit_per_sec
        self._last_call_ts = 0.0
        self._ids = itertools.count(1)

    def _switch_node(self) -> None:
        if len(self.nodes) == 1:
            return
        self.index = (self.index + 1) % len(self.nodes)
        self.logger.warning("Switching RPC to node %s", self.index)

    def _current_node(self) -> Dict[str, str]:
        return self.nodes[self.index]

    def _respect_rate_limit(self) -> None:
        if not self.rate_limit_per_sec:
            return
        min_interval = 1.0 / self.rate_limit_per_sec
        elapsed = time.time() - self._last_call_ts
        if elapsed < min_interval:
            time.sleep(min_interval - elapsed)
        self._last_call_ts = time.time()

    def _perform_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        node = self._current_node()
        url = node["url"]
        auth = (node.get("user"), node.get("pass")) if node.get("user") else None
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}

        self._respect_rate_limit()
        response = requests.post(url, json=payload, auth=auth, timeout=self.timeout)
        response.raise_for_status()
        result = response.json()
        error = result.get("error")
        if error:
            if isinstance(error, dict):
                raise RPCError(error.get("message", str(error)), error.get("code"))
            raise RPCError(str(error))
        return result.get("result")

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Read-only call, retried across nodes."""
        attempts = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_fixed(self.retry_wait_seconds),
            retry=retry_if_exception_type((requests.RequestException, RPCError)),
            reraise=True,
        )

        for attempt in attempts:
            with attempt:
                try:
                    return self._perform_request(method, params)
                except Exception as exc:  # noqa: BLE001
                    self.logger.error("RPC error on %s: %s", method, exc)
                    self._switch_node()
                    raise

    def send(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """State-changing call. Issued once; a failure is never resubmitted."""
        try:
            return self._perform_request(method, params)
        except Exception as exc:  # noqa: BLE001
            self.logger.error("RPC error on %s: %s", method, exc)
            raise
