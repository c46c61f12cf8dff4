from mirror_backup.cli.entrypoint import cli_entry

if __name__ == '__main__':
	cli_entry()
