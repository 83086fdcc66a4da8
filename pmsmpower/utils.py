import dataclasses

import numpy as np

dataclass = dataclasses.dataclass(frozen=True)

# machine epsilon; tolerance for the non-salience check and zero speed
EPS = np.finfo(float).eps


@dataclass
class Base:
	"""Base class for immutable data classes, varied through replace"""

	def replace(obj, /, **kwargs):
		"""Like dataclasses.replace, but refuses keys that are not fields"""
		names = {f.name for f in dataclasses.fields(obj)}
		unknown = sorted(set(kwargs) - names)
		if unknown:
			raise AttributeError(f'{type(obj).__name__} has no fields {unknown}')
		return dataclasses.replace(obj, **kwargs)
