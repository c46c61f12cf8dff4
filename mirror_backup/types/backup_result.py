import dataclasses

from mirror_backup.types.transcode_failure import TranscodeFailures


@dataclasses.dataclass(frozen=True)
class BackupResult:
	candidate_count: int
	succeeded_count: int
	failures: TranscodeFailures = dataclasses.field(default_factory=TranscodeFailures)
	raw_size: int = 0
	stored_size: int = 0
	ledger_saved: bool = False

	@property
	def failed_count(self) -> int:
		return len(self.failures)

	@property
	def nothing_to_do(self) -> bool:
		return self.candidate_count == 0
