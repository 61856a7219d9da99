from itertools import combinations


def rank_combination_safe(combination, elements):
    '''slow but correct version of rank_combination'''

    element_map = {v: k for k, v in enumerate(elements)}
    k = len(combination)
    n = len(elements)
    combination = tuple(sorted(element_map[e] for e in combination))
    for rank, elm in enumerate(combinations(range(n), k)):
        if elm == combination:
            return rank


def generate_combination_safe(elements, k, rank):
    '''slow but correct version of generate_combination'''
    for r, c in enumerate(combinations(elements, k)):
        if rank == r:
            return c


def all_combinations_safe(n, k):
    '''every k-subset of range(n), in lexicographic order'''
    return list(combinations(range(n), k))
