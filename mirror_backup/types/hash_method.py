import dataclasses
import enum
import importlib

from typing_extensions import Protocol

_HEX_DIGITS = frozenset('0123456789abcdef')


class Hasher(Protocol):
	def update(self, b: bytes):
		...

	def hexdigest(self) -> str:
		...


@dataclasses.dataclass(frozen=True)
class _HashMethodItem:
	module: str
	factory: str
	hex_length: int

	def create_hasher(self) -> Hasher:
		# imported on use, so a missing optional library only matters when its method is selected
		return getattr(importlib.import_module(self.module), self.factory)()

	def is_hexdigest(self, s: str) -> bool:
		return len(s) == self.hex_length and all(c in _HEX_DIGITS for c in s)


class HashMethod(enum.Enum):
	"""
	Hash functions for the content hashes recorded in the hash ledger
	"""
	sha256 = _HashMethodItem('hashlib', 'sha256', 64)
	blake3 = _HashMethodItem('blake3', 'blake3', 64)


def is_recordable_digest(s: str) -> bool:
	"""
	A lowercase hex digest that any of the hash methods could have produced.
	The ledger doesn't store which method made a digest, so switching the method keeps old entries valid
	"""
	return any(method.value.is_hexdigest(s) for method in HashMethod)
