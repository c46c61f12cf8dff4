import io
from typing import Union, Optional, TYPE_CHECKING

if TYPE_CHECKING:
	from mirror_backup.types.hash_method import HashMethod


class HashingReader(io.RawIOBase):
	"""
	A read-only stream wrapper that feeds every byte read from the underlying file object into a hasher,
	so a file can be compressed and hashed in one pass
	"""
	def __init__(self, file_obj: io.BufferedIOBase, *, hash_method: Optional['HashMethod'] = None):
		super().__init__()
		from mirror_backup.utils import hash_utils
		self.__file_obj = file_obj
		self.__hasher = hash_utils.create_hasher(hash_method=hash_method)
		self.__read_len = 0

	def readable(self) -> bool:
		return True

	def read(self, size: int = -1) -> bytes:
		data = self.__file_obj.read(size)
		self.__read_len += len(data)
		self.__hasher.update(data)
		return data

	def readinto(self, b: Union[bytearray, memoryview]) -> int:
		n = self.__file_obj.readinto(b)
		if n:
			self.__read_len += n
			self.__hasher.update(b[:n])
		return n

	def get_read_len(self) -> int:
		return self.__read_len

	def get_hash(self) -> str:
		return self.__hasher.hexdigest()
