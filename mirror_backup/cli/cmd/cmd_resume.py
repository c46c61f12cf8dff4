import argparse
from pathlib import Path

from typing_extensions import override

from mirror_backup.cli.cmd import CliCommandAdapterBase
from mirror_backup.cli.cmd.cmd_run import RunCommandHandler, RunCommandArgs


class ResumeCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'resume'

	@property
	@override
	def description(self) -> str:
		return 'Resume a previously interrupted backup'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		self._add_config_argument(parser)

	@override
	def run(self, args: argparse.Namespace):
		handler = RunCommandHandler(RunCommandArgs(
			config_path=Path(args.config),
			resume=True,
		))
		handler.handle()
