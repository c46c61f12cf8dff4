import enum
from typing import Type


def enum_options(clazz: Type[enum.Enum]) -> str:
	return ', '.join([e_.name for e_ in clazz])
