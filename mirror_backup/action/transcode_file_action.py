import dataclasses
from pathlib import Path
from typing import Optional

from typing_extensions import override

from mirror_backup.action import Action
from mirror_backup.compressors import Compressor, CompressMethod
from mirror_backup.exceptions import FileTranscodeError, SourcePathNotInRoot
from mirror_backup.types.hash_method import HashMethod
from mirror_backup.utils import file_utils, path_utils


@dataclasses.dataclass(frozen=True)
class TranscodeResult:
	source_path: Path
	destination_path: Path
	hash: str  # hash of the original, uncompressed content
	raw_size: int
	stored_size: int


def get_destination_path(source_file: Path, source_root: Path, destination_root: Path, compress_method: CompressMethod) -> Path:
	"""
	:raise SourcePathNotInRoot: if source_file is not inside source_root
	"""
	if not path_utils.is_relative_to(source_file, source_root):
		raise SourcePathNotInRoot(source_file, source_root)
	relative_path = source_file.relative_to(source_root)
	destination_path = destination_root / relative_path
	return destination_path.with_name(path_utils.append_suffix(destination_path.name, compress_method.value.get_file_suffix()))


class TranscodeFileAction(Action[TranscodeResult]):
	"""
	Compress a source file to its mirrored destination path, and hash its original content
	"""
	def __init__(
			self, source_file: Path, source_root: Path, destination_root: Path, *,
			compress_method: Optional[CompressMethod] = None,
			hash_method: Optional[HashMethod] = None,
	):
		super().__init__()
		self.source_file = source_file
		self.source_root = source_root
		self.destination_root = destination_root
		self.compress_method = compress_method or self.config.backup.compress_method
		self.hash_method = hash_method or self.config.backup.hash_method

	@override
	def run(self) -> TranscodeResult:
		"""
		:raise FileTranscodeError: on any failure of this single file
		"""
		destination_path = get_destination_path(self.source_file, self.source_root, self.destination_root, self.compress_method)

		try:
			file_utils.mkdir_parents(destination_path.parent)
			compressor = Compressor.create(self.compress_method)
			cr = compressor.copy_compressed(self.source_file, destination_path, hash_method=self.hash_method)
		except Exception as e:
			raise FileTranscodeError(self.source_file, e) from e

		self.logger.debug('Transcoded {!r} -> {!r}, size {} -> {}, hash {}'.format(
			str(self.source_file), str(destination_path), cr.read_size, cr.write_size, cr.read_hash,
		))
		return TranscodeResult(
			source_path=self.source_file,
			destination_path=destination_path,
			hash=cr.read_hash,
			raw_size=cr.read_size,
			stored_size=cr.write_size,
		)
