from typing import Self
from typing import Iterator, Iterable, Sequence
import collections
import itertools
import math

__all__ = [
	'Partition', 'partitions',
	'centralizer_order', 'class_size', 'dim',
	'partitionseq', 'trim_seq',
]


# PARTITION
# ---------

class Partition(tuple):
	'''
	integer partition: a weakly decreasing tuple of positive integers.

	it labels both the irreducible characters of S_n and its conjugacy classes
	(through the cycle type of their elements), where n is the sum of the parts.
	'''

	def __new__(cls, parts: Iterable[int] = (), check: bool = True):
		self = super().__new__(cls, parts)
		if check:
			if not all(isinstance(x, int) and x > 0 for x in self):
				raise ValueError(f'partition parts must be positive integers: {tuple(self)}')
			if any(a < b for a, b in itertools.pairwise(self)):
				raise ValueError(f'partition parts must be weakly decreasing: {tuple(self)}')
		return self

	def __repr__(self):
		return f'{type(self).__name__}({list(self)})'

	@property
	def n(self) -> int:
		''' the integer being partitioned '''
		return sum(self)

	def conj(self) -> Self:
		''' conjugate (transposed) partition: lengths of the columns of the Young diagram '''
		return type(self)((sum(1 for x in self if x > j) for j in range(self[0] if self else 0)), check=False)

	@classmethod
	def from_seq(cls, seq: Sequence[bool]) -> Self:
		''' opposite of partitionseq() '''
		rows = []
		width = 0
		for step in trim_seq(seq):
			if step:
				width += 1
			else:
				rows.append(width)
		return cls(reversed(rows), check=False)

def partitions(n: int) -> Iterator[Partition]:
	''' all partitions of `n`, in reverse lexicographic order: (n), (n-1, 1), ..., (1, ..., 1) '''
	def generator(remaining: int, largest: int, prefix: tuple[int, ...]):
		if not remaining:
			yield Partition(prefix, check=False)
			return
		for part in range(min(remaining, largest), 0, -1):
			yield from generator(remaining - part, part, prefix + (part,))
	return generator(n, n, ())


# CLASS & CHARACTER DEGREES
# -------------------------

def centralizer_order(mu: Iterable[int]) -> int:
	'''
	order of the centralizer of any permutation of cycle type `mu`:
	the product over the part sizes `i` (with multiplicity `m`) of `i**m * m!`
	'''
	return math.prod(i ** m * math.factorial(m) for i, m in collections.Counter(mu).items())

def class_size(mu: Iterable[int]) -> int:
	''' number of permutations with cycle type `mu` '''
	mu = tuple(mu)
	return math.factorial(sum(mu)) // centralizer_order(mu)

def dim(lam: Partition) -> int:
	''' degree of the irreducible representation labeled by `lam` (hook length formula) '''
	lam = Partition(lam)
	cols = lam.conj()
	hooks = math.prod(
		(row - j - 1) + (cols[j] - i - 1) + 1
		for i, row in enumerate(lam)
		for j in range(row)
	)
	return math.factorial(lam.n) // hooks


# PARTITION SEQUENCE
# ------------------

def partitionseq(lam: Iterable[int]) -> tuple[bool, ...]:
	'''
	encodes a partition as the steps along the rim of its Young diagram (english
	notation), from the bottom-left corner to the top-right one: `True` for a step
	to the right, `False` for a step up.

	a partition with `k` parts, the first one being `m`, takes `m + k` steps;
	the sequence starts with `True` and ends with `False`, and the empty partition
	is the empty sequence. any sequence maps back to a partition (see `trim_seq`).

	removing a rim hook of size `s` is the same as swapping a `True` with a
	`False` that comes `s` steps later; the leg length of the hook is the amount
	of `False` between them.
	'''
	seq: list[bool] = []
	previous = 0
	for part in reversed(tuple(lam)):
		seq.extend([True] * (part - previous))
		seq.append(False)
		previous = part
	return tuple(seq)

def trim_seq(seq: Sequence[bool]) -> tuple[bool, ...]:
	'''
	strips leading steps up and trailing steps to the right, which don't change
	the shape. the result is the canonical sequence of that shape, as returned
	by `partitionseq()`.
	'''
	start, end = 0, len(seq)
	while start < end and not seq[start]:
		start += 1
	while end > start and seq[end - 1]:
		end -= 1
	return tuple(seq[start:end])
