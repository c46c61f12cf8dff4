import argparse
import dataclasses
from pathlib import Path

from typing_extensions import override

from mirror_backup.action.backup_job import BackupJob
from mirror_backup.cli.cmd import CliCommandHandlerBase, CliCommandAdapterBase
from mirror_backup.cli.return_codes import ErrorReturnCodes
from mirror_backup.exceptions import ConfigError, LedgerLoadError, LedgerSaveError
from mirror_backup.utils import conversion_utils


@dataclasses.dataclass(frozen=True)
class RunCommandArgs:
	config_path: Path
	resume: bool


class RunCommandHandler(CliCommandHandlerBase):
	def __init__(self, args: RunCommandArgs):
		super().__init__()
		self.args = args

	def handle(self):
		self.init_environment(self.args.config_path)

		try:
			job = BackupJob()
		except LedgerLoadError as e:
			self.logger.error('{}'.format(e))
			ErrorReturnCodes.ledger_error.sys_exit()

		try:
			result = job.resume() if self.args.resume else job.run()
		except ConfigError as e:
			self.logger.error('Invalid configuration: {}'.format(e))
			ErrorReturnCodes.config_error.sys_exit()
		except LedgerSaveError as e:
			self.logger.error('{}. Compressed files already written are kept'.format(e))
			ErrorReturnCodes.ledger_error.sys_exit()

		if not result.nothing_to_do:
			self.logger.info('Files: {} succeeded, {} failed. Size: {} -> {}'.format(
				result.succeeded_count, result.failed_count,
				conversion_utils.byte_count_to_str(result.raw_size), conversion_utils.byte_count_to_str(result.stored_size),
			))
			for line in result.failures.to_lines():
				self.logger.warning('  {}'.format(line))


class RunCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'run'

	@property
	@override
	def description(self) -> str:
		return 'Run backup with previously saved configuration'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		self._add_config_argument(parser)

	@override
	def run(self, args: argparse.Namespace):
		handler = RunCommandHandler(RunCommandArgs(
			config_path=Path(args.config),
			resume=False,
		))
		handler.handle()
