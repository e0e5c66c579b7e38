# File: bucket_scout/wordlist.py
"""bucket_scout.wordlist: candidate bucket names built from a seed and a word list.

Three permutation strategies are applied in order and their results are
concatenated, then de-duplicated keeping the first occurrence:

* raw  – the seed itself;
* envs – ``seed``/``word``/environment tag joined five different ways;
* host – ``seed`` and ``word`` joined with ``.``, ``-`` or nothing, both ways.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Final, List, Sequence, Tuple, Union

from bucket_scout.utils import read_wordlist, remove_duplicates

__all__: Sequence[str] = (
    "ENVIRONMENTS",
    "generate",
    "from_file",
    "permutation_raw",
    "permutation_envs",
    "permutation_host",
)

ENVIRONMENTS: Final[Tuple[str, ...]] = (
    "dev",
    "development",
    "stage",
    "s3",
    "staging",
    "prod",
    "production",
    "test",
)
ENV_FORMATS: Final[Tuple[str, ...]] = (
    "{0}-{1}-{2}",
    "{0}-{1}.{2}",
    "{0}-{1}{2}",
    "{0}.{1}-{2}",
    "{0}.{1}.{2}",
)
HOST_DELIMITERS: Final[Tuple[str, ...]] = (".", "-", "")


def permutation_raw(seed: str, words: Sequence[str]) -> List[str]:
    return [seed]


def permutation_envs(seed: str, words: Sequence[str]) -> List[str]:
    return [
        fmt.format(seed, word, env)
        for word in words
        for env in ENVIRONMENTS
        for fmt in ENV_FORMATS
    ]


def permutation_host(seed: str, words: Sequence[str]) -> List[str]:
    names: List[str] = []
    for word in words:
        for delimiter in HOST_DELIMITERS:
            names.append(f"{seed}{delimiter}{word}")
            names.append(f"{word}{delimiter}{seed}")
    return names


PERMUTATIONS: Final[Tuple[Callable[[str, Sequence[str]], List[str]], ...]] = (
    permutation_raw,
    permutation_envs,
    permutation_host,
)


def generate(seed: str, words: Sequence[str]) -> List[str]:
    """Returns the ordered, de-duplicated candidate names for *seed* and *words*.

    The list before de-duplication holds ``1 + 5·N·8 + 6·N`` names for ``N``
    words. Raises :class:`ValueError` for an empty seed.
    """
    if not seed:
        raise ValueError("seed must be a non-empty string")
    names: List[str] = []
    for permutation in PERMUTATIONS:
        names.extend(permutation(seed, words))
    return remove_duplicates(names)


def from_file(seed: str, path: Union[str, Path]) -> List[str]:
    """Same as :func:`generate` with the words read from a newline-delimited file."""
    return generate(seed, read_wordlist(path))
