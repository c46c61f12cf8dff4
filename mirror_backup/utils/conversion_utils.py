_BYTE_UNITS = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB']


def byte_count_to_str(size: int, *, ndigits: int = 2) -> str:
	"""
	Examples: 0 -> "0B", 1023 -> "1023B", 4096 -> "4.00KiB"
	"""
	value = float(size)
	for unit in _BYTE_UNITS:
		if abs(value) < 1024 or unit == _BYTE_UNITS[-1]:
			if unit == _BYTE_UNITS[0]:
				return f'{size}{unit}'
			return f'{value:.{ndigits}f}{unit}'
		value /= 1024
	raise AssertionError()
