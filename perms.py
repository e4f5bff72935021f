from typing import Self
from typing import Optional, Iterator, Iterable, Sequence, TypeVar, Union
from array import array
import copy
import itertools
import math
import re

from partitions import Partition

T = TypeVar('T')

def circular_pairwise(x: Iterable[T]) -> Iterator[tuple[T, T]]:
	''' like pairwise, but with a trailing (last, first) entry '''
	x = iter(x)
	start = next(x)
	e1 = start
	for e2 in x:
		yield (e1, e2)
		e1 = e2
	yield (e1, start)

__all__ = [
	'PermError', 'IncompatibleDegree', 'DegreeMismatch', 'InvalidCycleSyntax', 'NonBijectiveInput',
	'DEFAULT_TYPECODE', 'set_perm_style', 'get_perm_style',
	'CycleDec', 'cycledec', 'Permutation',
	'mul_into', 'power_by_squaring', 'emb_into',
	'parse_cycles', 'cycledec_from_cycles', 'perm_str',
]


# ERRORS
# ------

class PermError(Exception):
	''' base class for the errors raised by this library '''

class IncompatibleDegree(PermError, ValueError):
	''' permutations (or a permutation and a group) act on different numbers of points '''

class DegreeMismatch(IncompatibleDegree):
	''' a character of S_n evaluated on a permutation or class of another degree '''

class InvalidCycleSyntax(PermError, ValueError):
	''' text that isn't valid disjoint cycle notation '''

class NonBijectiveInput(PermError, ValueError):
	''' raw images that don't form a permutation of 1..n '''


# DISPLAY STYLE
# -------------

DEFAULT_TYPECODE = 'q'
''' `array` typecode used to store images when none is given (signed 64-bit) '''

PERM_STYLES = ('cycles', 'array')

_perm_style = 'cycles'

def set_perm_style(style: str) -> str:
	'''
	selects how permutations are formatted by `str()`:
	 - 'cycles': disjoint cycle notation, omitting fixed points, e.g. `(1,2,3)(4,5)` (default)
	 - 'array': list of images of 1..n, e.g. `[2, 3, 1, 5, 4]`

	the difference is purely esthetical.
	'''
	global _perm_style
	if style not in PERM_STYLES:
		raise ValueError(f'permutations can be displayed only as {" or ".join(PERM_STYLES)}, not {style!r}')
	_perm_style = style
	return style

def get_perm_style() -> str:
	return _perm_style


# CYCLE DECOMPOSITION
# -------------------

class CycleDec:
	'''
	disjoint cycle decomposition of a permutation, as computed at one point in time.

	cycles are stored back to back in `ccycles`, and cycle `i` occupies
	`ccycles[cptrs[i]:cptrs[i+1]]` (so `cptrs` has one more entry than there are
	cycles, starting at 0 and ending at n). fixed points are included as 1-cycles.

	when computed from a permutation, each cycle starts at the smallest point not
	visited by the previous ones; decompositions parsed from text keep the order
	they were written in. instances are immutable.
	'''

	__slots__ = ('ccycles', 'cptrs')

	ccycles: tuple[int, ...]
	cptrs: tuple[int, ...]

	def __init__(self, ccycles: Iterable[int], cptrs: Iterable[int]):
		self.ccycles = tuple(ccycles)
		self.cptrs = tuple(cptrs)

	def __len__(self) -> int:
		return len(self.cptrs) - 1

	def __iter__(self) -> Iterator[tuple[int, ...]]:
		for a, b in itertools.pairwise(self.cptrs):
			yield self.ccycles[a:b]

	def __getitem__(self, index: Union[int, slice, Iterable[int]]):
		if isinstance(index, int):
			n = len(self)
			if not (-n <= index < n):
				raise IndexError(f'cycle index {index} out of range')
			index %= n
			return self.ccycles[self.cptrs[index]:self.cptrs[index + 1]]
		if isinstance(index, slice):
			return [self[i] for i in range(len(self))[index]]
		return [self[i] for i in index]

	def lengths(self) -> list[int]:
		''' lengths of the cycles, in decomposition order '''
		return [b - a for a, b in itertools.pairwise(self.cptrs)]

	def __eq__(self, other):
		if not isinstance(other, CycleDec):
			return NotImplemented
		return (self.ccycles, self.cptrs) == (other.ccycles, other.cptrs)

	def __hash__(self):
		return hash((self.ccycles, self.cptrs))

	def __str__(self):
		return 'Cycle Decomposition: ' + ''.join('(' + ','.join(map(str, c)) + ')' for c in self)

	def __repr__(self):
		return f'{type(self).__name__}({self.ccycles!r}, {self.cptrs!r})'

def cycledec(d: Sequence[int]) -> CycleDec:
	''' decomposes the images `d` (of points 1..n) into disjoint cycles in a single scan '''
	to_visit = [True] * len(d)
	ccycles: list[int] = []
	cptrs = [0]
	for k in range(1, len(d) + 1):
		if not to_visit[k - 1]:
			continue
		to_visit[k - 1] = False
		ccycles.append(k)
		cursor = d[k - 1]
		while cursor != k:
			ccycles.append(cursor)
			to_visit[cursor - 1] = False
			cursor = d[cursor - 1]
		cptrs.append(len(ccycles))
	return CycleDec(ccycles, cptrs)


# PERMUTATION
# -----------

class Permutation:
	'''
	permutation of the points 1..n.

	the implemented operation follows the convention of GAP, the right action on
	the points: `g * h` performs `g` first and then `h`, i.e. `(g * h)(i) == h(g(i))`.

	images live in `d`, an `array.array` of the chosen typecode, so that `d[i - 1]`
	is the image of point `i`. every public index is a point (1-based): `g[i]`,
	`g(i)`, cycle notation and embedding positions.

	the cycle decomposition is computed on first use and cached. assigning through
	`g[i] = v` sets `modified`, which makes the next structural query (`cycles`,
	`cycle_type`, `order`, powers above 3) recompute it. that assignment is
	*unchecked*: the caller must restore a valid permutation before such a query.
	'''

	d: array
	modified: bool
	_cycles: Optional[CycleDec]

	def __init__(self, d: Iterable[int], check: bool = True, typecode: Optional[str] = None):
		'''
		constructs a permutation from the images of points 1..n. with `check=True`
		(default) the images are validated to be a permutation of 1..n, raising
		`NonBijectiveInput` otherwise.

		`typecode` selects the integer storage; by default it's taken from `d`
		if it's an array or permutation, and `DEFAULT_TYPECODE` otherwise.
		'''
		if isinstance(d, Permutation):
			d = d.d
		if typecode is None:
			typecode = d.typecode if isinstance(d, array) else DEFAULT_TYPECODE
		self.d = array(typecode, d)
		self.modified = False
		self._cycles = None
		if check:
			n = len(self.d)
			seen = [False] * n
			for j in self.d:
				if not (1 <= j <= n) or seen[j - 1]:
					raise NonBijectiveInput(f'{self.d.tolist()} is not a permutation of 1..{n}')
				seen[j - 1] = True

	@classmethod
	def identity(cls, n: int, typecode: str = DEFAULT_TYPECODE) -> Self:
		return cls(range(1, n + 1), check=False, typecode=typecode)

	@classmethod
	def from_cycledec(cls, cdec: CycleDec, typecode: str = DEFAULT_TYPECODE) -> Self:
		'''
		builds the permutation described by a (complete) cycle decomposition,
		which is kept as its cached decomposition.
		'''
		elt = cls.identity(len(cdec.ccycles), typecode)
		for cycle in cdec:
			for i, j in circular_pairwise(cycle):
				elt.d[i - 1] = j
		elt._cycles = cdec
		return elt

	@classmethod
	def from_cycles(cls, *cycles: Iterable[int], n: Optional[int] = None, typecode: str = DEFAULT_TYPECODE) -> Self:
		'''
		construct a permutation from disjoint cycles. the degree is `n` if given,
		or the largest point mentioned otherwise; other points are fixed. empty
		cycles are skipped.
		'''
		ccycles, cptrs = [], [0]
		for cycle in cycles:
			cycle = list(cycle)
			if not cycle:
				continue
			ccycles.extend(cycle)
			cptrs.append(len(ccycles))
		if n is None:
			n = max(ccycles, default=1)
		return cls.from_cycledec(cycledec_from_cycles(ccycles, cptrs, n), typecode)

	@property
	def typecode(self) -> str:
		return self.d.typecode

	@property
	def parent(self):
		''' the symmetric group this permutation belongs to '''
		from symmetric import SymmetricGroup
		return SymmetricGroup(len(self.d), self.typecode)

	def similar(self) -> Self:
		'''
		new permutation of the same degree and typecode, with unspecified
		(invalid) contents. meant to be filled in by the caller.
		'''
		result = type(self)(array(self.typecode, [0]) * len(self.d), check=False)
		result.modified = True
		return result

	def __copy__(self) -> Self:
		result = type(self)(self.d, check=False)
		# the decomposition is immutable, so it can be shared
		result._cycles, result.modified = self._cycles, self.modified
		return result

	def __deepcopy__(self, memo) -> Self:
		return self.__copy__()

	# low-level access

	def _check_point(self, i: int):
		if not isinstance(i, int):
			raise TypeError(f'points must be integers, not {type(i)}')
		if not (1 <= i <= len(self.d)):
			raise IndexError(f'point {i} out of range 1..{len(self.d)}')

	def __len__(self) -> int:
		return len(self.d)

	def __iter__(self) -> Iterator[int]:
		return iter(self.d)

	def __getitem__(self, i: int) -> int:
		self._check_point(i)
		return self.d[i - 1]

	def __setitem__(self, i: int, v: int):
		''' sets the image of point `i` to `v`, without validating the result '''
		self._check_point(i)
		self.modified = True
		self.d[i - 1] = v

	def __call__(self, i: int) -> int:
		''' interprets this permutation as a function on 1..n '''
		return self[i]

	# formatting

	def __str__(self):
		if _perm_style == 'array':
			return self.array_str()
		return self.cycle_str()

	def __repr__(self):
		return f'{type(self).__name__}({self.d.tolist()})'

	def array_str(self) -> str:
		return '[' + ', '.join(map(str, self.d)) + ']'

	def cycle_str(self, width: Optional[int] = None) -> str:
		'''
		disjoint cycle notation, omitting 1-cycles; the identity is `()`.

		if `width` is given, the output is cut to fit that many characters: the
		last cycle that doesn't fit is truncated and ended with ` …`.
		'''
		if width is not None and width <= 3:
			raise ValueError(f'display width must be larger than 3, not {width}')
		if self.is_identity():
			return '()'
		out = []
		cum_length = 0
		for c in self.cycles():
			if len(c) == 1:
				continue
			cyc = ','.join(map(str, c))
			if width is None or width - cum_length >= len(cyc) + 2:
				out.append(f'({cyc})')
				cum_length += len(cyc) + 2
			else:
				available = max(width - cum_length - 3, 0)
				out.append('(' + cyc[:available] + ' …')
				break
		return ''.join(out)

	# comparison

	def _cmpkey(self):
		return tuple(self.d)

	def __eq__(self, other):
		'''
		permutations are equal if they have the same images. permutations of
		different degree are never equal, even if they only differ by fixed points;
		the storage typecode doesn't matter.
		'''
		if not isinstance(other, Permutation):
			return NotImplemented
		return len(self.d) == len(other.d) and self.d == other.d

	def __hash__(self):
		# mutating a permutation stored in a set or dict is the caller's problem
		return hash(self._cmpkey())

	# ordering is only defined between permutations of the same degree

	def __lt__(self, other: Self):
		if not isinstance(other, Permutation):
			return NotImplemented
		self._check_degree(other)
		return self._cmpkey().__lt__(other._cmpkey())

	def __le__(self, other: Self):
		if not isinstance(other, Permutation):
			return NotImplemented
		self._check_degree(other)
		return self._cmpkey().__le__(other._cmpkey())

	def __gt__(self, other: Self):
		if not isinstance(other, Permutation):
			return NotImplemented
		self._check_degree(other)
		return self._cmpkey().__gt__(other._cmpkey())

	def __ge__(self, other: Self):
		if not isinstance(other, Permutation):
			return NotImplemented
		self._check_degree(other)
		return self._cmpkey().__ge__(other._cmpkey())

	def is_identity(self) -> bool:
		return all(i == j for i, j in enumerate(self.d, 1))

	def __bool__(self):
		return not self.is_identity()

	# core group operations

	def _check_degree(self, other: 'Permutation'):
		if len(self.d) != len(other.d):
			raise IncompatibleDegree(f'incompatible permutation degrees: {len(self.d)} and {len(other.d)}')

	def __mul__(self, other: Self) -> Self:
		if not isinstance(other, Permutation):
			return NotImplemented
		self._check_degree(other)
		wider = other if other.d.itemsize > self.d.itemsize else self
		return mul_into(wider.similar(), self, other)

	@property
	def inv(self) -> Self:
		''' inverse element. equivalent to the notation `g ** -1` '''
		result = self.similar()
		rd = result.d
		for i, j in enumerate(self.d, 1):
			rd[j - 1] = i
		return result

	def __invert__(self) -> Self:
		return self.inv

	def invert_inplace(self) -> Self:
		''' replaces this permutation with its inverse, and returns it '''
		d = array(self.typecode, [0]) * len(self.d)
		for i, j in enumerate(self.d, 1):
			d[j - 1] = i
		self.d = d
		self.modified = True
		return self

	def __pow__(self, k: int) -> Self:
		'''
		`k`-th power of this permutation (`k` may be negative).

		exponents up to 3 compose the images directly; larger ones use the cycle
		decomposition (computing and caching it if needed), moving every point
		`k mod l` steps along its cycle of length `l`. see `power_by_squaring`
		for an alternative that doesn't touch the cache.
		'''
		if not isinstance(k, int):
			return NotImplemented
		d, typecode = self.d, self.typecode
		if k < 0:
			return self.inv ** -k
		if k == 0:
			return type(self).identity(len(d), typecode)
		if k == 1:
			return copy.copy(self)
		if k == 2:
			return type(self)([d[j - 1] for j in d], check=False, typecode=typecode)
		if k == 3:
			return type(self)([d[d[j - 1] - 1] for j in d], check=False, typecode=typecode)
		result = self.similar()
		rd = result.d
		for cycle in self.cycles():
			l = len(cycle)
			shift = k % l
			for idx, j in enumerate(cycle):
				rd[j - 1] = cycle[(idx + shift) % l]
		return result

	def conj(self, other: Self) -> Self:
		''' conjugate an element using this element: equivalent to `self.inv * other * self` '''
		return self.inv * other * self

	def conj_by(self, other: Self) -> Self:
		''' conjugate this element by `other`: equivalent to `other.inv * self * other` '''
		return other.conj(self)

	def comm(self, other: Self) -> Self:
		''' obtains a commutator element: equivalent to `self.inv * other.inv * self * other` '''
		return self.inv * other.inv * self * other

	# cycle decomposition & derived properties

	def cycles(self) -> CycleDec:
		'''
		disjoint cycle decomposition of this permutation. it's cached, and reused by
		`cycle_type`, `parity`, `sign`, `order` and powering until the permutation
		is modified.
		'''
		if self._cycles is None or self.modified:
			self._cycles = cycledec(self.d)
			self.modified = False
		return self._cycles

	def cycle_type(self) -> Partition:
		''' lengths of the disjoint cycles, in descending order. determines the conjugacy class '''
		return Partition(sorted(self.cycles().lengths(), reverse=True), check=False)

	def parity(self) -> int:
		'''
		parity of the number of transpositions in any decomposition of this
		permutation: 0 if even, 1 if odd.

		a valid cached cycle decomposition is used if there is one, but it's not
		computed on demand; call `cycles()` first to have it cached.
		'''
		if self._cycles is not None and not self.modified:
			return sum(l - 1 for l in self._cycles.lengths()) % 2
		d = self.d
		to_visit = [True] * len(d)
		parity = False
		for k in range(1, len(d) + 1):
			if not to_visit[k - 1]:
				continue
			to_visit[k - 1] = False
			cursor = d[k - 1]
			while cursor != k:
				parity = not parity
				to_visit[cursor - 1] = False
				cursor = d[cursor - 1]
		return int(parity)

	def sign(self) -> int:
		''' 1 if this permutation is even, -1 if it's odd '''
		return -1 if self.parity() else 1

	def order(self) -> int:
		''' order of this element: lowest positive `k` such that `self ** k` is the identity '''
		return math.lcm(*self.cycles().lengths())


def mul_into(out: Permutation, g: Permutation, h: Permutation) -> Permutation:
	'''
	stores the product `g * h` in `out` and returns it. `out` may be `g`; if it's
	`h`, a new permutation is allocated instead.
	'''
	if out is h:
		out = h.similar()
	out._check_degree(g)
	g._check_degree(h)
	od, gd, hd = out.d, g.d, h.d
	for i in range(len(gd)):
		od[i] = hd[gd[i] - 1]
	out.modified = True
	return out

def power_by_squaring(g: Permutation, k: int) -> Permutation:
	'''
	`k`-th power of `g` by exponentiation by squaring on the images, without
	computing (or caching) the cycle decomposition. gives the same results as
	`g ** k`; it may or may not be faster depending on the case, but repeated
	powering of the same `g` is usually faster with `g ** k`.
	'''
	if k < 0:
		g, k = g.inv, -k
	if k <= 3:
		return g ** k
	result = list(range(1, len(g.d) + 1))
	mult = g.d.tolist()
	while True:
		if k & 1: result = [mult[j - 1] for j in result]
		k >>= 1
		if not k: break
		mult = [mult[j - 1] for j in mult]
	return type(g)(result, check=False, typecode=g.typecode)

def emb_into(result: Permutation, p: Permutation, V: Sequence[int]) -> Permutation:
	'''
	embeds permutation `p` into `result` on the points listed in `V`, and returns it.

	this is the natural embedding of S_k into S_n as the subgroup permuting the
	points `V`: point `V[i]` takes the place previously held by `V[p[i+1] - 1]`.
	nothing is validated; see `SymmetricGroup.emb()` for a checked version.
	'''
	rd = result.d
	previous = [rd[v - 1] for v in V]
	for v, j in zip(V, p.d):
		rd[v - 1] = previous[j - 1]
	result.modified = True
	return result


# PARSING
# -------

_CYCLE_RE = re.compile(r'\((\d+(?:,\d+)*)\)')
_CYCLES_RE = re.compile(r'(?:\(\d+(?:,\d+)*\))*')

def parse_cycles(text: str) -> tuple[list[int], list[int]]:
	'''
	parses disjoint cycle notation such as `(1,3)(2,4)` into `(ccycles, cptrs)`
	(see `CycleDec`). whitespace is ignored except between two digits, empty
	cycles `()` are skipped, and the `Cycle Decomposition: ` prefix produced by
	`str(CycleDec)` is accepted. raises `InvalidCycleSyntax` for anything else.
	'''
	text = text.strip().removeprefix('Cycle Decomposition:')
	if re.search(r'\d\s+\d', text):
		raise InvalidCycleSyntax(f'could not parse string as cycles: {text!r}')
	text = re.sub(r'\s+', '', text).replace('()', '')
	if not _CYCLES_RE.fullmatch(text):
		raise InvalidCycleSyntax(f'could not parse string as cycles: {text!r}')
	ccycles: list[int] = []
	cptrs = [0]
	for m in _CYCLE_RE.finditer(text):
		ccycles.extend(int(a) for a in m.group(1).split(','))
		cptrs.append(len(ccycles))
	return ccycles, cptrs

def cycledec_from_cycles(ccycles: list[int], cptrs: list[int], n: int, check: bool = True) -> CycleDec:
	'''
	completes a (possibly partial) list of disjoint cycles over 1..n into a full
	`CycleDec`, by appending the points not mentioned as 1-cycles.
	'''
	if check:
		if ccycles and min(ccycles) < 1:
			raise InvalidCycleSyntax(f'points must be positive: {ccycles}')
		if ccycles and max(ccycles) > n:
			raise IncompatibleDegree(f'points in {ccycles} larger than {n}')
		if len(set(ccycles)) != len(ccycles):
			raise InvalidCycleSyntax(f'non-unique points in {ccycles}')
	ccycles, cptrs = list(ccycles), list(cptrs)
	if len(ccycles) != n:
		mentioned = set(ccycles)
		to_append = [i for i in range(1, n + 1) if i not in mentioned]
		l = len(ccycles)
		cptrs.extend(range(l + 1, l + len(to_append) + 1))
		ccycles.extend(to_append)
	return CycleDec(ccycles, cptrs)

def perm_str(text: str, typecode: str = DEFAULT_TYPECODE) -> Permutation:
	'''
	parses disjoint cycle notation (as output by GAP, or by `str()` in the
	'cycles' style) into a permutation of minimal degree: the largest point
	mentioned, or 1 if there's none. 1-cycles may be included or omitted.

		>>> perm_str('(1,3)(2,4)')
		Permutation([3, 4, 1, 2])
		>>> len(perm_str('(1,3)(2,4)(10)'))
		10
	'''
	ccycles, cptrs = parse_cycles(text)
	n = max(ccycles, default=1)
	return Permutation.from_cycledec(cycledec_from_cycles(ccycles, cptrs, n), typecode)
