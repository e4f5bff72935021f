from hypothesis import given, settings, strategies as st
import math
import pytest

from characters import CharacterMemo, CHARVALS, CHARVALS_BIG, memo_for, character, character_table, mn_inner, rim_hooks
from partitions import Partition, partitions, partitionseq, class_size, dim
from perms import Permutation, perm_str, DegreeMismatch, IncompatibleDegree
from symmetric import SymmetricGroup


S3_TABLE = {
	(3,):      {(3,): 1, (2, 1):  1, (1, 1, 1): 1},
	(2, 1):    {(3,): -1, (2, 1): 0, (1, 1, 1): 2},
	(1, 1, 1): {(3,): 1, (2, 1): -1, (1, 1, 1): 1},
}


def test_examples():
	chi = character([3, 1])
	assert chi(SymmetricGroup(4).one()) == 3
	assert chi(perm_str('(1,3)(2,4)')) == -1
	assert character([3, 1], [2, 2]) == -1
	assert character([3, 1], perm_str('(1,3)(2,4)')) == -1

def test_s3_table():
	table = character_table(3)
	assert table == S3_TABLE
	assert list(table) == [(3,), (2, 1), (1, 1, 1)]

def test_trivial_and_sign():
	for g in SymmetricGroup(5):
		assert character([5], g) == 1
		assert character([1] * 5, g) == g.sign()

def test_standard_representation():
	# fixed points minus one
	chi = character([4, 1])
	for g in SymmetricGroup(5):
		assert chi(g) == g.cycle_type().count(1) - 1

def test_class_order():
	assert character([3, 2], [1, 2, 2]) == character([3, 2], [2, 2, 1])

@pytest.mark.parametrize("lam", list(partitions(4)))
def test_orthogonality(lam):
	total = sum(class_size(mu) * character(lam, mu) ** 2 for mu in partitions(4))
	assert total == math.factorial(4)

@pytest.mark.parametrize("n", range(1, 7))
def test_orthogonality_relations(n):
	table = character_table(n)
	classes = list(partitions(n))
	for lam in classes:
		for rho in classes:
			total = sum(class_size(mu) * table[lam][mu] * table[rho][mu] for mu in classes)
			assert total == (math.factorial(n) if lam == rho else 0)
	# column orthogonality
	for mu in classes:
		for nu in classes:
			total = sum(table[lam][mu] * table[lam][nu] for lam in classes)
			assert total == (math.factorial(n) // class_size(mu) if mu == nu else 0)

@pytest.mark.parametrize("n", range(1, 7))
def test_degrees(n):
	identity = Partition([1] * n)
	for lam in partitions(n):
		assert character(lam, identity) == dim(lam)

def test_sum_over_group():
	chi = character([2, 1, 1])
	assert sum(chi(g) ** 2 for g in SymmetricGroup(4)) == 24

def test_class_function():
	chi = character([3, 2, 1])
	G = SymmetricGroup(6)
	g = perm_str('(1,2,3)(4,5)(6)')
	for h in G.gens():
		assert chi(g.conj_by(h)) == chi(g)

@settings(max_examples=50)
@given(st.permutations(range(1, 8)))
def test_transposition_scaling(images):
	# χ_λ(σ) and χ_λ'(σ) differ by the sign of σ
	g = Permutation(images)
	for lam in [Partition([4, 2, 1]), Partition([5, 2]), Partition([3, 3, 1])]:
		assert character(lam.conj(), g) == g.sign() * character(lam, g)


# errors

def test_degree_mismatch():
	chi = character([3, 1])
	with pytest.raises(DegreeMismatch):
		chi(Permutation.identity(5))
	with pytest.raises(IncompatibleDegree):
		chi(Permutation.identity(3))
	with pytest.raises(DegreeMismatch):
		character([3, 1], [2, 2, 1])
	with pytest.raises(DegreeMismatch):
		character([3, 1], Permutation.identity(3))

def test_invalid_partition():
	with pytest.raises(ValueError):
		character([1, 3])
	with pytest.raises(ValueError):
		character([3, 1], [2, 0, 2])


# memo tables

def test_memo():
	memo = CharacterMemo()
	assert len(memo) == 0
	assert character([3, 1], [2, 2], memo=memo) == -1
	key = (partitionseq([3, 1]), (2, 2))
	assert key in memo
	assert memo.get(key) == -1
	size = len(memo)
	assert character([3, 1], [2, 2], memo=memo) == -1
	assert len(memo) == size

def test_memo_shared_between_characters():
	memo = CharacterMemo()
	assert character([2, 2], [2, 1, 1], memo=memo) == 0
	# both shapes left after removing a domino from [2,2]
	assert memo.get((partitionseq([2]), (1, 1))) == 1
	assert memo.get((partitionseq([1, 1]), (1, 1))) == 1
	size = len(memo)
	# [3,1] reaches [2] again, without adding it
	assert character([3, 1], [2, 1, 1], memo=memo) == 1
	assert len(memo) > size
	assert memo.get((partitionseq([2]), (1, 1))) == 1

def test_memo_insert_if_absent():
	memo = CharacterMemo()
	key = (partitionseq([2]), (1, 1))
	assert memo.insert(key, 1) == 1
	assert memo.insert(key, 1) == 1
	assert len(memo) == 1

def test_memo_widths():
	assert memo_for(None) is CHARVALS_BIG
	assert memo_for(64) is CHARVALS
	with pytest.raises(ValueError):
		memo_for(32)
	for lam in partitions(5):
		for mu in partitions(5):
			assert character(lam, mu, width=64) == character(lam, mu)

def test_memo_overflow():
	lam = Partition([4, 2, 2, 1])
	identity = Partition([1] * 9)
	with pytest.raises(OverflowError):
		character(lam, identity, memo=CharacterMemo(bits=8))
	assert character(lam, identity, memo=CharacterMemo(bits=16)) == 216

def test_closure_uses_memo():
	memo = CharacterMemo()
	chi = character([2, 1], memo=memo)
	assert chi(perm_str('(1,2,3)')) == -1
	assert (partitionseq([2, 1]), (3,)) in memo

def test_mn_inner():
	memo = CharacterMemo()
	assert mn_inner((), (), 0, memo) == 1
	assert mn_inner((True, False), (), 0, memo) == 0
	assert mn_inner(partitionseq([2, 1]), (3,), 0, memo) == -1
	assert mn_inner(partitionseq([2, 1]), (2, 1), 0, memo) == 0

def test_rim_hooks():
	# (2,2) has two dominoes: a horizontal one and a vertical one
	assert sorted(rim_hooks(partitionseq([2, 2]), 2)) == [(-1, partitionseq([1, 1])), (1, partitionseq([2]))]
	assert list(rim_hooks(partitionseq([3, 1]), 2)) == [(1, partitionseq([1, 1]))]
	assert list(rim_hooks(partitionseq([2, 1]), 2)) == []


# large classes

def test_many_fixed_points():
	identity = Partition([1] * 1200)
	memo = CharacterMemo()
	assert character([1200], identity, memo=memo) == 1
	assert character([1] * 1200, identity, memo=memo) == 1
	assert character([1199, 1], identity, memo=memo) == 1199

def test_many_cycles():
	memo = CharacterMemo()
	mu = Partition([2] * 599 + [1, 1])
	assert character([1200], mu, memo=memo) == 1
	assert character([1] * 1200, mu, memo=memo) == -1
