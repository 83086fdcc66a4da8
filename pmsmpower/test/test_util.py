import pytest

from pmsmpower.utils import *


@dataclass
class Foo(Base):
	a: int = 0
	b: float = 1.0


def test_replace():
	f = Foo()
	r = f.replace(a=3)
	assert r.a == 3
	assert r.b == 1.0
	# original left untouched
	assert f.a == 0
	assert f.replace() == f


def test_replace_unknown():
	with pytest.raises(AttributeError):
		Foo().replace(c=1)
	# nested paths are not supported
	with pytest.raises(AttributeError):
		Foo().replace(__a=1)


def test_frozen():
	with pytest.raises(dataclasses.FrozenInstanceError):
		Foo().a = 1
