import argparse
from typing import List, Dict, Optional

from mirror_backup.cli.cmd import CliCommandAdapterBase
from mirror_backup.cli.cmd.cmd_decompress import DecompressCommandAdapter
from mirror_backup.cli.cmd.cmd_resume import ResumeCommandAdapter
from mirror_backup.cli.cmd.cmd_run import RunCommandAdapter
from mirror_backup.cli.cmd.cmd_setup import SetupCommandAdapter
from mirror_backup.cli.return_codes import ErrorReturnCodes
from mirror_backup.logger import get as get_logger
from mirror_backup.utils import log_utils

__all__ = ['cli_entry']


def __prepare_logger():
	logger = get_logger()
	assert len(logger.handlers) == 1
	logger.handlers[0].setFormatter(log_utils.LOG_FORMATTER_NO_FUNC)


__prepare_logger()


class CliEntrypoint:
	def __init__(self):
		self.logger = get_logger()
		self.adaptors = self.__create_command_adapters()

	@classmethod
	def __create_command_adapters(cls) -> Dict[str, CliCommandAdapterBase]:
		all_adapters: List[CliCommandAdapterBase] = [
			RunCommandAdapter(),
			ResumeCommandAdapter(),
			SetupCommandAdapter(),
			DecompressCommandAdapter(),
		]
		adaptor_by_command = {adapter.command: adapter for adapter in all_adapters}

		if len(all_adapters) != len(adaptor_by_command):
			raise AssertionError(all_adapters, adaptor_by_command)

		return adaptor_by_command

	def main(self, argv: Optional[List[str]] = None):
		parser = argparse.ArgumentParser(description='Mirror a directory tree into a compressed one, resumable', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
		subparsers = parser.add_subparsers(title='Command', help='Available commands', dest='command')

		for adapter in self.adaptors.values():
			subparser = subparsers.add_parser(adapter.command, help=adapter.description, description=adapter.description, formatter_class=argparse.ArgumentDefaultsHelpFormatter)
			adapter.build_parser(subparser)

		args = parser.parse_args(argv)
		if args.command is None:
			parser.print_help()
			return

		adapter = self.adaptors.get(args.command)
		if adapter is None:
			self.logger.error('Unknown command {!r}'.format(args.command))
			ErrorReturnCodes.invalid_argument.sys_exit()

		try:
			adapter.run(args)
		except KeyboardInterrupt:
			self.logger.warning('Interrupted, the progress of the current run is not saved')
			ErrorReturnCodes.action_failed.sys_exit()


def cli_entry():
	CliEntrypoint().main()
