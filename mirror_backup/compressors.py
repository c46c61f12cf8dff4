import contextlib
import dataclasses
import enum
import shutil
from abc import abstractmethod, ABC
from pathlib import Path
from typing import BinaryIO, Union, ContextManager, Optional, TYPE_CHECKING

from typing_extensions import Protocol

from mirror_backup.utils.bypass_io import HashingReader

if TYPE_CHECKING:
	from mirror_backup.types.hash_method import HashMethod


class Compressor(ABC):
	@dataclasses.dataclass(frozen=True)
	class CopyCompressResult:
		read_size: int
		read_hash: str
		write_size: int

	@classmethod
	def create(cls, method: Union[str, 'CompressMethod']) -> 'Compressor':
		if not isinstance(method, CompressMethod):
			if method in CompressMethod.__members__:
				method = CompressMethod[method]
			else:
				raise ValueError(f'Unknown compression method: {method}')
		return method.value()

	@classmethod
	def get_method(cls) -> 'CompressMethod':
		return CompressMethod(cls)

	@classmethod
	def get_name(cls) -> str:
		return cls.get_method().name

	@classmethod
	@abstractmethod
	def get_file_suffix(cls) -> str:
		"""
		The canonical file suffix of the compressed artifacts, without the leading dot
		"""
		...

	def copy_compressed(self, source_path: Path, dest_path: Path, *, hash_method: Optional['HashMethod'] = None) -> CopyCompressResult:
		"""
		source --[compress]--> destination
		       ^- hashed
		"""
		with open(source_path, 'rb') as f_in, open(dest_path, 'wb') as f_out:
			reader = HashingReader(f_in, hash_method=hash_method)
			with self.compress_stream(f_out) as compressed_out:
				shutil.copyfileobj(reader, compressed_out)
			return self.CopyCompressResult(reader.get_read_len(), reader.get_hash(), f_out.tell())

	def copy_decompressed(self, source_path: Path, dest_path: Path):
		"""
		source --[decompress]--> destination
		"""
		with open(source_path, 'rb') as f_in, open(dest_path, 'wb') as f_out:
			with self.decompress_stream(f_in) as decompressed_in:
				shutil.copyfileobj(decompressed_in, f_out)

	@abstractmethod
	def compress_stream(self, f_out: BinaryIO) -> ContextManager[BinaryIO]:
		"""
		Open a stream from compressing write
		"""
		...

	@abstractmethod
	def decompress_stream(self, f_in: BinaryIO) -> ContextManager[BinaryIO]:
		"""
		Open a stream from decompressing read
		"""
		...


class _GzipLikeLibrary(Protocol):
	def open(self, file_obj: BinaryIO, mode: str, **kwargs) -> BinaryIO:
		...


class _GzipLikeCompressorBase(Compressor, ABC):
	@classmethod
	def _lib(cls) -> _GzipLikeLibrary:
		...

	@classmethod
	def _compress_kwargs(cls) -> dict:
		return {}

	@classmethod
	def _decompress_kwargs(cls) -> dict:
		return {}

	@contextlib.contextmanager
	def compress_stream(self, f_out: BinaryIO) -> ContextManager[BinaryIO]:
		with self._lib().open(f_out, 'wb', **self._compress_kwargs()) as compressed_out:
			yield compressed_out

	@contextlib.contextmanager
	def decompress_stream(self, f_in: BinaryIO) -> ContextManager[BinaryIO]:
		with self._lib().open(f_in, 'rb', **self._decompress_kwargs()) as compressed_in:
			yield compressed_in


class GzipCompressor(_GzipLikeCompressorBase):
	@classmethod
	def get_file_suffix(cls) -> str:
		return 'gz'

	@classmethod
	def _lib(cls):
		import gzip
		return gzip

	@classmethod
	def _compress_kwargs(cls) -> dict:
		return {'compresslevel': 6}


class LzmaCompressor(_GzipLikeCompressorBase):
	@classmethod
	def get_file_suffix(cls) -> str:
		return 'xz'

	@classmethod
	def _lib(cls):
		import lzma
		return lzma

	@classmethod
	def _compress_kwargs(cls) -> dict:
		return {'preset': 3}


class ZstdCompressor(_GzipLikeCompressorBase):
	COMPRESSION_LEVEL = 3  # fast, with a reasonable ratio

	@classmethod
	def get_file_suffix(cls) -> str:
		return 'zst'

	@classmethod
	def _lib(cls):
		import zstandard
		return zstandard

	@classmethod
	def _compress_kwargs(cls) -> dict:
		# the file object is owned by the caller
		return {'cctx': cls._lib().ZstdCompressor(level=cls.COMPRESSION_LEVEL), 'closefd': False}

	@classmethod
	def _decompress_kwargs(cls) -> dict:
		return {'closefd': False}


class Lz4Compressor(_GzipLikeCompressorBase):
	@classmethod
	def get_file_suffix(cls) -> str:
		return 'lz4'

	@classmethod
	def _lib(cls):
		# noinspection PyPackageRequirements
		import lz4.frame
		return lz4.frame


class CompressMethod(enum.Enum):
	gzip = GzipCompressor
	lzma = LzmaCompressor
	zstd = ZstdCompressor
	lz4 = Lz4Compressor

	@classmethod
	def from_file_name(cls, file_name: Union[str, Path]) -> Optional['CompressMethod']:
		name = Path(file_name).name
		for method in cls:
			if name.endswith('.' + method.value.get_file_suffix()):
				return method
		return None

	def __repr__(self) -> str:
		return '{}({!r})'.format(self.__class__.__name__, self.name)
