from typing import Optional, Callable, Iterator, Iterable, Sequence, Any, Union
from array import array
import itertools
import logging
import math
import random
import re

from perms import (
	DEFAULT_TYPECODE, Permutation, CycleDec,
	IncompatibleDegree, NonBijectiveInput,
	parse_cycles, cycledec_from_cycles, emb_into,
)

logger = logging.getLogger(__name__)

__all__ = [
	'AllPerms',
	'SymmetricGroup',
]


# ENUMERATION
# -----------

class AllPerms:
	'''
	iterator over all the permutations of 1..n, using the non-recursive
	Heap's algorithm. the first one is the identity, and every following one
	differs from the previous by a single transposition.

	only one permutation is allocated: every step modifies it in place and
	yields *the same object* again, so permutations that must outlive the next
	step need to be copied explicitly (`copy.copy`). iterating over a
	`SymmetricGroup` does that for you.

	the iterator can't be restarted, and must not be shared between consumers;
	create a new one for every traversal.
	'''

	elts: Permutation
	''' the permutation being modified in place '''
	c: list[int]
	''' Heap's counters, 1-based (c[0] is unused) '''
	all: int
	''' total amount of permutations (n!) '''
	count: int
	''' amount of permutations yielded so far '''

	def __init__(self, n: int, typecode: str = DEFAULT_TYPECODE):
		self.elts = Permutation.identity(n, typecode)
		self.c = [1] * (n + 1)
		self.all = math.factorial(n)
		self.count = 0

	def __len__(self) -> int:
		return self.all

	def __iter__(self) -> Iterator[Permutation]:
		return self

	def __next__(self) -> Permutation:
		if self.count >= self.all:
			raise StopIteration
		self.count += 1
		if self.count == 1:
			return self.elts

		c, d = self.c, self.elts.d
		k = 1
		while c[k] >= k:
			c[k] = 1
			k += 1
		j = 1 if k % 2 else c[k]
		d[j - 1], d[k - 1] = d[k - 1], d[j - 1]
		c[k] += 1
		self.elts.modified = True
		return self.elts


# SYMMETRIC GROUP
# ---------------

def _sample_perm(n: int, rng: Any) -> list[int]:
	return rng.sample(range(1, n + 1), n)

_rng = random.Random()

class SymmetricGroup:
	'''
	full symmetric group over the points 1..n, parent of `Permutation` elements
	of that degree.

	a group is identified by its degree and by the typecode used to store its
	elements (see `Permutation`): two groups are equal iff both match.
	iterating over a group yields each element exactly once, as a fresh copy;
	see `elements()` for the faster, in-place iterator.
	'''

	n: int
	typecode: str

	def __init__(self, n: int, typecode: str = DEFAULT_TYPECODE):
		if not isinstance(n, int) or n < 0:
			raise ValueError(f'degree must be a non-negative integer, not {n!r}')
		array(typecode) # validates the typecode
		self.n = n
		self.typecode = typecode

	def __eq__(self, other):
		if not isinstance(other, SymmetricGroup):
			return NotImplemented
		return (self.n, self.typecode) == (other.n, other.typecode)

	def __hash__(self):
		return hash((type(self).__name__, self.n, self.typecode))

	def __repr__(self):
		name = type(self).__name__
		if self.typecode == DEFAULT_TYPECODE:
			return f'{name}({self.n})'
		return f'{name}({self.n}, {self.typecode!r})'

	def __str__(self):
		return f'Full symmetric group over {self.n} elements'

	# elements

	def order(self) -> int:
		return math.factorial(self.n)

	def __len__(self) -> int:
		# raises OverflowError for orders that don't fit in an index; use order() instead
		return self.order()

	def __iter__(self) -> Iterator[Permutation]:
		return (Permutation(p.d, check=False) for p in self.elements())

	def elements(self) -> AllPerms:
		''' unsafe iterator over all the elements, modifying a single permutation in place; see `AllPerms` '''
		logger.debug('enumerating %d elements of S_%d', self.order(), self.n)
		return AllPerms(self.n, self.typecode)

	def __contains__(self, p: Any) -> bool:
		return isinstance(p, Permutation) and len(p) == self.n

	def one(self) -> Permutation:
		''' the identity element '''
		return Permutation.identity(self.n, self.typecode)

	@property
	def ID(self) -> Permutation:
		return self.one()

	def gens(self) -> list[Permutation]:
		''' generators of the group: the n-cycle `(1,2,...,n)` and the transposition `(1,2)` '''
		if self.n < 2:
			return []
		b = self.one()
		b[1], b[2] = 2, 1
		if self.n == 2:
			return [b]
		a = Permutation([*range(2, self.n + 1), 1], check=False, typecode=self.typecode)
		return [a, b]

	@property
	def number_of_generators(self) -> int:
		return len(self.gens())

	def is_abelian(self) -> bool:
		return self.n <= 2

	def is_finite(self) -> bool:
		return True

	def random(self, rng: Optional[random.Random] = None,
			supplier: Optional[Callable[[int, Any], Sequence[int]]] = None) -> Permutation:
		'''
		uniformly random element of the group.

		the images are obtained from `supplier(n, rng)`, which must return a
		uniformly random permutation of 1..n; by default `rng.sample` is used.
		`rng` defaults to a shared `random.Random` instance.
		'''
		rng = _rng if rng is None else rng
		supplier = _sample_perm if supplier is None else supplier
		return Permutation(supplier(self.n, rng), typecode=self.typecode)

	# coercion

	def __call__(self, value: Union[Permutation, CycleDec, str, Iterable[int]], check: bool = True) -> Permutation:
		'''
		coerces `value` into an element of this group:
		 - a permutation is returned unchanged if it already belongs to this
		   group, and copied (converting its storage) otherwise.
		 - a string is parsed as disjoint cycle notation (see `perms.perm_str`),
		   the points not mentioned being fixed.
		 - a `CycleDec` is turned into the permutation it describes.
		 - any other iterable is taken as the images of 1..n.

		with `check=True` the value is validated, raising `IncompatibleDegree` if it
		has a different degree and `NonBijectiveInput` if it's not a permutation.
		'''
		if isinstance(value, Permutation):
			if value.parent == self:
				return value
			if check and len(value) != self.n:
				raise IncompatibleDegree(f'cannot coerce a permutation of {len(value)} points to {self}')
			return Permutation(value.d, check=check, typecode=self.typecode)
		if isinstance(value, str):
			ccycles, cptrs = parse_cycles(value)
			return self(cycledec_from_cycles(ccycles, cptrs, self.n, check=check), check=check)
		if isinstance(value, CycleDec):
			if check:
				if len(value.ccycles) != self.n:
					raise IncompatibleDegree(f'cannot coerce a decomposition of {len(value.ccycles)} points to {self}')
				if sorted(value.ccycles) != list(range(1, self.n + 1)):
					raise NonBijectiveInput(f'{value} does not mention every point of 1..{self.n} exactly once')
				ptrs = value.cptrs
				if not ptrs or ptrs[0] != 0 or ptrs[-1] != self.n or any(a >= b for a, b in itertools.pairwise(ptrs)):
					raise NonBijectiveInput(f'{value!r} has invalid cycle boundaries')
			return Permutation.from_cycledec(value, self.typecode)
		value = list(value)
		if check and len(value) != self.n:
			raise IncompatibleDegree(f'cannot coerce {len(value)} images to {self}')
		return Permutation(value, check=check, typecode=self.typecode)

	# embedding

	def emb(self, V: Iterable[int], check: bool = True) -> Callable[[Permutation], Permutation]:
		'''
		natural embedding of S_k into this group, as the subgroup permuting the
		points listed in `V` (k being the length of `V`) and fixing the rest.

			>>> f = SymmetricGroup(5).emb([3, 2, 5])
			>>> print(f(Permutation([2, 3, 1])))
			(2,5,3)
		'''
		V = list(V)
		if check:
			if len(set(V)) != len(V):
				raise NonBijectiveInput(f'embedding positions {V} are not unique')
			if not all(1 <= v <= self.n for v in V):
				raise IncompatibleDegree(f'embedding positions {V} out of range 1..{self.n}')
		def embed(p: Permutation) -> Permutation:
			if check and len(p) != len(V):
				raise IncompatibleDegree(f'cannot embed a permutation of {len(p)} points on {len(V)} positions')
			return emb_into(self.one(), p, V)
		return embed


# AUTOMAGICAL GROUP CREATION
# --------------------------

def __getattr__(name: str):
	if (m := re.fullmatch(r'S(\d+)', name)):
		G = SymmetricGroup(int(m.group(1)))
		globals()[name] = G
		return G
	raise AttributeError(f'module {__name__!r} has no attribute {name!r}')
