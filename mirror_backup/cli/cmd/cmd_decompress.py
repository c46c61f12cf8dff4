import argparse
import dataclasses
from pathlib import Path
from typing import Optional

from typing_extensions import override

from mirror_backup.action.decompress_file_action import DecompressFileAction
from mirror_backup.cli import cli_utils
from mirror_backup.cli.cmd import CliCommandHandlerBase, CliCommandAdapterBase
from mirror_backup.cli.return_codes import ErrorReturnCodes
from mirror_backup.compressors import CompressMethod


@dataclasses.dataclass(frozen=True)
class DecompressCommandArgs:
	source: Path
	destination: Path
	method: Optional[str]


class DecompressCommandHandler(CliCommandHandlerBase):
	def __init__(self, args: DecompressCommandArgs):
		super().__init__()
		self.args = args

	def handle(self):
		method: Optional[CompressMethod] = None
		if self.args.method is not None:
			try:
				method = CompressMethod[self.args.method]
			except KeyError:
				self.logger.error('Bad compress method {!r}, should be one of {}'.format(self.args.method, cli_utils.enum_options(CompressMethod)))
				ErrorReturnCodes.invalid_argument.sys_exit()

		if not self.args.source.is_file():
			self.logger.error('Source file {!r} does not exist'.format(self.args.source.as_posix()))
			ErrorReturnCodes.invalid_argument.sys_exit()

		self.logger.info('Decompressing file...')
		try:
			DecompressFileAction(self.args.source, self.args.destination, compress_method=method).run()
		except Exception as e:
			self.logger.error('Failed to decompress file: ({}) {}'.format(type(e).__name__, e))
			ErrorReturnCodes.action_failed.sys_exit()
		self.logger.info('File decompressed to {}'.format(self.args.destination.as_posix()))


class DecompressCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'decompress'

	@property
	@override
	def description(self) -> str:
		return 'Decompress a file'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		parser.add_argument('source', help='Path to the compressed file, e.g. my_file.txt.zst')
		parser.add_argument('destination', help='Path where the decompressed file will be saved')
		parser.add_argument('-m', '--method', help='The compress method of the file. If not given, attempt to infer from the file name. Options: {}'.format(cli_utils.enum_options(CompressMethod)))

	@override
	def run(self, args: argparse.Namespace):
		handler = DecompressCommandHandler(DecompressCommandArgs(
			source=Path(args.source),
			destination=Path(args.destination),
			method=args.method,
		))
		handler.handle()
