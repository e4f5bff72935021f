'''
irreducible characters of the symmetric groups, via the Murnaghan–Nakayama rule:

	χ_λ(μ) = Σ_ξ (-1)^ll(ξ) χ_{λ∖ξ}(μ ∖ μ₁)

where ξ runs over the rim hooks of λ of size μ₁ (the first part of the class μ),
ll(ξ) is the leg length of the hook (number of rows it spans, minus one) and
μ ∖ μ₁ is μ without its first part. the empty shape has value 1 on the empty class.

shapes are handled through their rim encoding (see `partitions.partitionseq`),
and every value computed along the way is stored in a `CharacterMemo`, keyed by
(shape, remaining class). values are shared between characters, since the key
doesn't depend on the partition the computation started from.

for more details see e.g. chapter 2.8 of *Group Theory and Physics* by S. Sternberg.
'''

from typing import Optional, Iterable, Iterator, Union
import logging

from partitions import Partition, partitions, partitionseq, trim_seq, dim
from perms import Permutation, DegreeMismatch

logger = logging.getLogger(__name__)

__all__ = [
	'CharacterMemo', 'CHARVALS', 'CHARVALS_BIG', 'memo_for',
	'rim_hooks', 'mn_inner', 'character', 'character_table',
]

MemoKey = tuple[tuple[bool, ...], tuple[int, ...]]


# MEMO TABLES
# -----------

class CharacterMemo:
	'''
	table of computed character values, keyed by `(seq, mu)`: the trimmed rim
	encoding of a shape and the class (tuple of cycle lengths) it was evaluated on.

	values are written once and never evicted. insertion is done with
	`dict.setdefault`, so two evaluations racing on the same key keep one of
	two identical values and nothing needs to be locked.

	if `bits` is given, stored values are restricted to signed integers of that
	width, and `OverflowError` is raised for values that don't fit.
	'''

	bits: Optional[int]

	def __init__(self, bits: Optional[int] = None):
		self.bits = bits
		self._values: dict[MemoKey, int] = {}

	def __len__(self) -> int:
		return len(self._values)

	def __contains__(self, key: MemoKey) -> bool:
		return key in self._values

	def __repr__(self):
		width = 'arbitrary precision' if self.bits is None else f'{self.bits}-bit'
		return f'<{type(self).__name__} ({width}) with {len(self)} values>'

	def get(self, key: MemoKey) -> Optional[int]:
		return self._values.get(key)

	def insert(self, key: MemoKey, value: int) -> int:
		''' stores `value` unless the key is already present; returns the stored value '''
		if self.bits is not None:
			bound = 1 << (self.bits - 1)
			if not (-bound <= value < bound):
				raise OverflowError(f'character value {value} does not fit in {self.bits} bits')
		return self._values.setdefault(key, value)

CHARVALS = CharacterMemo(bits=64)
''' process-wide table for machine width (signed 64-bit) values '''

CHARVALS_BIG = CharacterMemo()
''' process-wide table for arbitrary precision values '''

def memo_for(width: Optional[int]) -> CharacterMemo:
	''' process-wide table for the given integer width (`None` for arbitrary precision) '''
	if width is None:
		return CHARVALS_BIG
	if width == CHARVALS.bits:
		return CHARVALS
	raise ValueError(f'there is no character table for {width}-bit integers')


# MURNAGHAN–NAKAYAMA
# ------------------

def rim_hooks(seq: tuple[bool, ...], s: int) -> Iterator[tuple[int, tuple[bool, ...]]]:
	''' yields `(sign, rest)` for every rim hook of size `s` of the shape encoded by `seq` '''
	# a rim hook of size s: a step right at i, and a step up at i + s
	for i in range(len(seq) - s):
		if not seq[i] or seq[i + s]:
			continue
		between = seq[i + 1:i + s]
		rest = trim_seq(seq[:i] + (False,) + between + (True,) + seq[i + s + 1:])
		yield (-1 if between.count(False) % 2 else 1), rest

def mn_inner(seq: tuple[bool, ...], mu: tuple[int, ...], t: int, memo: CharacterMemo) -> int:
	'''
	value of the character of the shape encoded by `seq` on the class `mu[t:]`.

	`seq` must be trimmed (see `partitions.trim_seq`), and the shape must have
	the same size as `mu[t:]`; this isn't checked.

	the recursion is unrolled into an explicit stack of pending (shape, t)
	pairs, so its depth isn't bounded by the interpreter. once only 1-cycles
	remain, the value is the degree of the shape (hook length formula).
	'''
	mu = tuple(mu)
	ones = len(mu)
	while ones and mu[ones - 1] == 1:
		ones -= 1

	def lookup(seq, t):
		if t == len(mu):
			return 0 if seq else 1
		key = (seq, mu[t:])
		value = memo.get(key)
		if value is None and t >= ones:
			value = memo.insert(key, dim(Partition.from_seq(seq)))
		return value

	stack = [(seq, t)]
	while stack:
		seq, t = stack[-1]
		value = lookup(seq, t)
		if value is None:
			hooks = list(rim_hooks(seq, mu[t]))
			pending = [(rest, t + 1) for _, rest in hooks if lookup(rest, t + 1) is None]
			if pending:
				stack.extend(pending)
				continue
			value = memo.insert((seq, mu[t:]), sum(sign * lookup(rest, t + 1) for sign, rest in hooks))
		stack.pop()
	return value


# PUBLIC API
# ----------

def _class_of(lam: Partition, x: Union[Permutation, Iterable[int]], check: bool) -> tuple[int, ...]:
	if isinstance(x, Permutation):
		if check and len(x) != lam.n:
			raise DegreeMismatch(f'character {lam} can only be evaluated on permutations of {lam.n} points, not {len(x)}')
		return x.cycle_type()
	mu = x if isinstance(x, Partition) else Partition(sorted(x, reverse=True))
	if check and mu.n != lam.n:
		raise DegreeMismatch(f'cannot evaluate {lam} on the conjugacy class of {mu}: sizes differ')
	return mu

def character(lam: Iterable[int], x: Union[Permutation, Iterable[int], None] = None, *,
		check: bool = True, width: Optional[int] = None, memo: Optional[CharacterMemo] = None):
	'''
	value of the irreducible character χ_λ of S_n, n being the sum of `lam`.

	 - `character(lam)` returns a function `chi(p, check=True)` evaluating χ_λ on
	   permutations. `lam` is encoded once, so prefer it for many evaluations.
	 - `character(lam, mu)` evaluates χ_λ on the conjugacy class of cycle type `mu`
	   (any order of the parts is accepted).
	 - `character(lam, p)` evaluates χ_λ on permutation `p`.

	values are cached in the process-wide table for `width` (`None` for arbitrary
	precision, or 64), or in `memo` if given. with `check=True` the sizes are
	validated, raising `DegreeMismatch` if they differ.

		>>> chi = character([3, 1])
		>>> chi(Permutation.identity(4))
		3
		>>> character([3, 1], [2, 2])
		-1
	'''
	lam = Partition(lam)
	if memo is None:
		memo = memo_for(width)
	seq = partitionseq(lam)

	if x is None:
		logger.debug('character %s: rim encoding %s, %r', lam, seq, memo)
		def chi(p: Permutation, check: bool = True) -> int:
			return mn_inner(seq, _class_of(lam, p, check), 0, memo)
		return chi

	return mn_inner(seq, _class_of(lam, x, check), 0, memo)

def character_table(n: int, *, width: Optional[int] = None, memo: Optional[CharacterMemo] = None) -> dict[Partition, dict[Partition, int]]:
	''' full character table of S_n, as `{lam: {mu: value}}` with both in reverse lexicographic order '''
	if memo is None:
		memo = memo_for(width)
	classes = list(partitions(n))
	table = { lam: { mu: character(lam, mu, check=False, memo=memo) for mu in classes } for lam in classes }
	logger.debug('character table of S_%d: %d classes, %r', n, len(classes), memo)
	return table
