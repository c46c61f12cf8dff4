import argparse
import dataclasses
from pathlib import Path
from typing import List

from typing_extensions import override

from mirror_backup import constants
from mirror_backup.cli.cmd import CliCommandHandlerBase, CliCommandAdapterBase
from mirror_backup.cli.return_codes import ErrorReturnCodes
from mirror_backup.config.config import Config


@dataclasses.dataclass(frozen=True)
class SetupCommandArgs:
	output_path: Path
	source_path: str
	destination_path: str
	hash_file_path: str
	blacklist: List[str]


class SetupCommandHandler(CliCommandHandlerBase):
	def __init__(self, args: SetupCommandArgs):
		super().__init__()
		self.args = args

	def handle(self):
		for name, value in [('Source path', self.args.source_path), ('Destination path', self.args.destination_path), ('Hash file path', self.args.hash_file_path)]:
			if len(value) == 0:
				self.logger.error('{} cannot be empty'.format(name))
				ErrorReturnCodes.invalid_argument.sys_exit()
		if not Path(self.args.source_path).exists():
			self.logger.error('Source path {!r} does not exist'.format(self.args.source_path))
			ErrorReturnCodes.invalid_argument.sys_exit()

		config = Config.get_default()
		config.source_path = self.args.source_path
		config.destination_path = self.args.destination_path
		config.hash_file_path = self.args.hash_file_path
		config.backup.add_blacklist_items(self.args.blacklist)

		config.save_to_file(self.args.output_path)
		self.logger.info('Configuration saved to {!r}'.format(self.args.output_path.as_posix()))
		self.logger.info('Blacklisted names: {}'.format(', '.join(config.backup.blacklist_dirs)))
		self.logger.info('Blacklisted extensions: {}'.format(', '.join(config.backup.blacklist_extensions)))


class SetupCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'setup'

	@property
	@override
	def description(self) -> str:
		return 'Set up a new backup configuration'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		parser.add_argument('-s', '--source', required=True, help='The directory to back up')
		parser.add_argument('-d', '--destination', required=True, help='The directory to store the compressed files')
		parser.add_argument('-H', '--hash-file', required=True, help='Path to store the hash ledger, e.g. /path/to/hashes.json')
		parser.add_argument('-b', '--blacklist', nargs='*', default=[], help='Extra blacklist items. Items starting with "." are file extensions, e.g. ".log", others are file or directory names, e.g. "build"')
		parser.add_argument('-o', '--output', default=constants.DEFAULT_CONFIG_FILE_NAME, help='Path to save the configuration file')

	@override
	def run(self, args: argparse.Namespace):
		handler = SetupCommandHandler(SetupCommandArgs(
			output_path=Path(args.output),
			source_path=args.source,
			destination_path=args.destination,
			hash_file_path=args.hash_file,
			blacklist=args.blacklist,
		))
		handler.handle()
