from __future__ import annotations

from typing import Callable

from boggle.graph import AdjacencyGraph
from boggle.heuristics import acceptable_for_listing
from boggle.trie import Trie, TrieNode

MIN_WORD_LENGTH = 3


class Solver:
    """Path search over one board's adjacency graph.

    Every search keeps its visited cells in a local bitmask, so one instance can
    be shared between threads as long as the graph and the trie are not mutated.
    """

    def __init__(self, graph: AdjacencyGraph, min_word_length: int = MIN_WORD_LENGTH):
        self.graph = graph
        self.letters: tuple[str, ...] = graph.letters
        self.neighbors: tuple[tuple[int, ...], ...] = graph.neighbors
        self.min_word_length = min_word_length

    def _trace(self, word: str) -> list[int] | None:
        """Backtracking walk that spells ``word``; the first path found or None.

        Starting cells are tried in increasing index order and neighbors in
        graph order, so the result is deterministic.
        """
        letters = self.letters
        neighbors = self.neighbors
        last = len(word) - 1

        def dfs(idx: int, pos: int, visited: int, path: list[int]) -> bool:
            if letters[idx] != word[pos]:
                return False
            path.append(idx)
            if pos == last:
                return True
            visited |= 1 << idx
            nxt = word[pos + 1]
            for nidx in neighbors[idx]:
                if not (visited & (1 << nidx)) and letters[nidx] == nxt:
                    if dfs(nidx, pos + 1, visited, path):
                        return True
            path.pop()
            return False

        for start, letter in enumerate(letters):
            if letter == word[0]:
                path: list[int] = []
                if dfs(start, 0, 0, path):
                    return path
        return None

    def can_form_word(self, word: str | None) -> bool:
        if not word or len(word) < self.min_word_length:
            return False
        return self._trace(word) is not None

    def reconstruct_path(self, word: str | None) -> list[int] | None:
        """Cell indices of one valid path for ``word``, or None if it cannot be formed."""
        if not word or len(word) < self.min_word_length:
            return None
        return self._trace(word)

    def find_all_words(
        self,
        dictionary: Trie,
        min_len: int = MIN_WORD_LENGTH,
        accept: Callable[[str], bool] | None = None,
    ) -> set[str]:
        """Enumerate every dictionary word spelled by a simple path on the board.

        Branches are abandoned as soon as the letters so far stop being a
        dictionary prefix. ``accept`` can veto words after the dictionary check.
        """
        found: set[str] = set()
        letters = self.letters
        neighbors = self.neighbors

        def dfs(idx: int, node: TrieNode, path: list[str], visited: int):
            child = node.children.get(letters[idx])
            if child is None:
                return

            path.append(letters[idx])
            if child.is_word and len(path) >= min_len:
                word = "".join(path)
                if accept is None or accept(word):
                    found.add(word)

            if child.children:
                for nidx in neighbors[idx]:
                    if not (visited & (1 << nidx)):
                        dfs(nidx, child, path, visited | (1 << nidx))

            path.pop()

        for start in range(len(letters)):
            dfs(start, dictionary.root, [], 1 << start)

        return found

    def find_all_words_filtered(self, dictionary: Trie, min_len: int = MIN_WORD_LENGTH) -> set[str]:
        return self.find_all_words(dictionary, min_len, acceptable_for_listing)


def rank_words(words, max_results: int = 0) -> list[str]:
    """Sort longest first, then alphabetically; ``max_results <= 0`` keeps all."""
    result = sorted(words, key=lambda w: (-len(w), w))
    return result[:max_results] if max_results > 0 else result
