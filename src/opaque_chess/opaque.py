"""
Opaque tokens and the equality oracle
-----

The engine never reads what a token stands for. The only thing it can do with two tokens is ask an oracle
whether they encrypt the same value, handing over a proof that the caller obtained beforehand.

`HmacOracle` is a small keyed implementation of that capability. The real oracle lives outside this
package; this one is what tests and local setups plug in.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Protocol

Proof = str


@dataclass(frozen=True)
class OpaqueToken:
    """Handle to an encrypted value. Equality of handles says nothing about equality of the values behind them."""

    handle: str

    @classmethod
    def null(cls) -> OpaqueToken:
        """Handle of a square that never had a piece placed on it."""
        return cls("")

    def matches(self, other: OpaqueToken, proof: Proof, oracle: EqualityOracle) -> bool:
        return oracle.equals(self, other, proof)

    def __repr__(self) -> str:
        # keep handles out of logs / tracebacks
        return "OpaqueToken(<opaque>)"


class EqualityOracle(Protocol):
    """The capability the engine needs. Both checks must be deterministic for a given set of arguments."""

    def equals(self, a: OpaqueToken, b: OpaqueToken, proof: Proof) -> bool:
        """Do `a` and `b` encrypt the same value? `proof` must vouch for both tokens."""
        ...

    def verify_decryption(
        self, token: OpaqueToken, clear_value: int, proof: Proof
    ) -> bool:
        """Is `clear_value` what `token` decrypts to?"""
        ...


class HmacOracle:
    """
    Keyed reference oracle.
    ---

    * `encrypt()` hands out a fresh random handle for every call, so encrypting the same value twice gives two different tokens.
    * `prove()` issues a proof covering a set of tokens. `equals()` only answers for tokens the proof covers.
    * `prove_decryption()` / `verify_decryption()` do the same for revealing a single token's value.
    """

    def __init__(self, key: bytes | None = None) -> None:
        self._key = key if key is not None else secrets.token_bytes(32)
        self._values: dict[str, int] = {}

    def encrypt(self, value: int) -> OpaqueToken:
        handle = secrets.token_hex(16)
        self._values[handle] = value
        return OpaqueToken(handle)

    def prove(self, *tokens: OpaqueToken) -> Proof:
        covered = ",".join(sorted({token.handle for token in tokens}))
        return f"{covered}:{self._sign('eq', covered)}"

    def equals(self, a: OpaqueToken, b: OpaqueToken, proof: Proof) -> bool:
        covered, _, signature = proof.rpartition(":")
        if not _same(signature, self._sign("eq", covered)):
            return False
        handles = set(covered.split(","))
        if a.handle not in handles or b.handle not in handles:
            return False
        if a.handle not in self._values or b.handle not in self._values:
            return False
        return self._values[a.handle] == self._values[b.handle]

    def prove_decryption(self, token: OpaqueToken) -> tuple[int, Proof]:
        """Decrypt `token`, returning its value together with a proof that can be checked later."""
        value = self._values[token.handle]
        return value, self._sign("dec", f"{token.handle}|{value}")

    def verify_decryption(
        self, token: OpaqueToken, clear_value: int, proof: Proof
    ) -> bool:
        expected = self._sign("dec", f"{token.handle}|{clear_value}")
        return _same(proof, expected) and (
            self._values.get(token.handle) == clear_value
        )

    def _sign(self, purpose: str, message: str) -> str:
        return hmac.new(
            self._key, f"{purpose}|{message}".encode(), hashlib.sha256
        ).hexdigest()


def _same(given: str, expected: str) -> bool:
    """Constant-time comparison that tolerates non-ASCII input from callers."""
    return hmac.compare_digest(given.encode(), expected.encode())
