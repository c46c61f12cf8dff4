from pathlib import Path
from typing import Optional

from typing_extensions import override

from mirror_backup.action import Action
from mirror_backup.compressors import Compressor, CompressMethod


class DecompressFileAction(Action[Path]):
	"""
	Restore the original content of a compressed artifact
	"""
	def __init__(self, source: Path, destination: Path, *, compress_method: Optional[CompressMethod] = None):
		super().__init__()
		self.source = source
		self.destination = destination
		self.compress_method = compress_method

	@override
	def run(self) -> Path:
		if not self.source.is_file():
			raise FileNotFoundError('Source file {!r} does not exist'.format(str(self.source)))

		method = self.compress_method
		if method is None:
			method = CompressMethod.from_file_name(self.source)
			if method is None:
				raise ValueError('Cannot infer the compress method from file name {!r}'.format(self.source.name))

		self.destination.parent.mkdir(parents=True, exist_ok=True)
		Compressor.create(method).copy_decompressed(self.source, self.destination)
		self.logger.debug('Decompressed {!r} to {!r} with {}'.format(str(self.source), str(self.destination), method.name))
		return self.destination
