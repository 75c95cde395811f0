"""Formula dependency tracking.

Tracks which field keys each formula field reads, so formula fields can be
evaluated in order and circular formulas can be rejected.
"""

from collections import defaultdict, deque
from collections.abc import Iterable

from branchreport.formula.validator import referenced_variables


class FormulaDependencyGraph:
    """
    Dependency graph between template field keys.

    - dependencies: key -> set of formula keys that read this key
    - reverse: formula key -> set of keys its formula reads
    """

    def __init__(self):
        # If key A changes, every key in dependencies[A] must be recomputed
        self.dependencies: dict[str, set[str]] = defaultdict(set)
        # To compute formula key A, every key in reverse[A] is needed first
        self.reverse: dict[str, set[str]] = defaultdict(set)

    @classmethod
    def from_formulas(
        cls, formulas: Iterable[tuple[str, str]]
    ) -> "FormulaDependencyGraph":
        """
        Build a graph from formula field keys and their formulas.

        A key listed more than once reads the union of its formulas' keys.
        Cycles are not rejected here; use ``add_formula_field`` for that.

        Args:
            formulas: (formula field key, formula string) pairs
        """
        reads: dict[str, set[str]] = defaultdict(set)
        for key, formula in formulas:
            reads[key].update(referenced_variables(formula))

        graph = cls()
        for key, depends_on in reads.items():
            graph._link(key, depends_on)
        return graph

    def add_formula_field(self, key: str, depends_on: set[str]) -> tuple[bool, str | None]:
        """
        Add or replace a formula field.

        Args:
            key: Key of the formula field
            depends_on: Keys the formula references

        Returns:
            Tuple of (success, error_message)
        """
        if self.detect_circular_reference(key, depends_on):
            return False, "Circular reference detected in formula dependencies"

        self._link(key, depends_on)
        return True, None

    def _link(self, key: str, depends_on: set[str]) -> None:
        for old_dep in self.reverse.get(key, set()):
            self.dependencies[old_dep].discard(key)

        self.reverse[key] = set(depends_on)
        for dep in depends_on:
            self.dependencies[dep].add(key)

    def get_evaluation_order(self, keys: set[str]) -> list[str]:
        """
        Order formula keys so every key comes after the keys it reads.

        Kahn's algorithm; ties keep the sorted key order so the result is
        deterministic.

        Args:
            keys: Formula field keys to evaluate

        Returns:
            Ordered keys, or an empty list if they contain a cycle
        """
        in_degree = {key: 0 for key in keys}
        for key in keys:
            for dep in self.reverse.get(key, set()):
                if dep in keys:
                    in_degree[key] += 1

        queue = deque(sorted(key for key, degree in in_degree.items() if degree == 0))

        result = []
        while queue:
            key = queue.popleft()
            result.append(key)

            for dependent in sorted(self.dependencies.get(key, set())):
                if dependent in in_degree:
                    in_degree[dependent] -= 1
                    if in_degree[dependent] == 0:
                        queue.append(dependent)

        if len(result) != len(keys):
            return []

        return result

    def detect_circular_reference(self, key: str, depends_on: set[str]) -> bool:
        """
        Check whether ``key`` reading ``depends_on`` would close a cycle.

        Args:
            key: Key of the formula field being added or updated
            depends_on: Keys its formula references

        Returns:
            True if a circular reference would be created
        """
        if key in depends_on:
            return True

        visited = set()
        to_check = list(depends_on)

        while to_check:
            current = to_check.pop()

            if current == key:
                return True

            if current in visited:
                continue
            visited.add(current)

            to_check.extend(self.reverse.get(current, set()))

        return False

    def __repr__(self) -> str:
        return (
            f"FormulaDependencyGraph("
            f"fields={len(self.reverse)}, "
            f"edges={sum(len(deps) for deps in self.dependencies.values())})"
        )
