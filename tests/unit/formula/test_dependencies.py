"""Unit tests for FormulaDependencyGraph."""

from branchreport.formula.dependencies import FormulaDependencyGraph

CIRCULAR = "Circular reference detected in formula dependencies"


class TestFormulaDependencyGraph:
    """Tests for FormulaDependencyGraph class."""

    def test_initialization(self):
        """Test that graph initializes empty."""
        graph = FormulaDependencyGraph()
        assert len(graph.dependencies) == 0
        assert len(graph.reverse) == 0

    def test_add_formula_field(self):
        """Test adding a formula field with dependencies."""
        graph = FormulaDependencyGraph()
        success, error = graph.add_formula_field("C", {"A", "B"})
        assert success is True
        assert error is None
        assert graph.reverse["C"] == {"A", "B"}
        assert "C" in graph.dependencies["A"]

    def test_replace_formula_field(self):
        """Test that re-adding a key drops its old edges."""
        graph = FormulaDependencyGraph()
        graph.add_formula_field("C", {"A", "B"})
        graph.add_formula_field("C", {"A"})
        assert graph.reverse["C"] == {"A"}
        assert "C" not in graph.dependencies["B"]

    def test_self_reference(self):
        """Test detecting a formula that reads its own key."""
        graph = FormulaDependencyGraph()
        assert graph.add_formula_field("C", {"C"}) == (False, CIRCULAR)

    def test_indirect_circular_reference(self):
        """Test detecting C -> D -> E -> C."""
        graph = FormulaDependencyGraph()
        graph.add_formula_field("C", {"D"})
        graph.add_formula_field("D", {"E"})
        assert graph.add_formula_field("E", {"C"}) == (False, CIRCULAR)
        assert graph.reverse.get("E", set()) == set()

    def test_from_formulas(self):
        """Test building a graph from key -> formula."""
        graph = FormulaDependencyGraph.from_formulas([("C", "A - B"), ("D", "C / A")])
        assert graph.reverse["C"] == {"A", "B"}
        assert graph.reverse["D"] == {"C", "A"}

    def test_from_formulas_shared_key(self):
        """Test that a key used by two formulas reads from both."""
        graph = FormulaDependencyGraph.from_formulas([("C", "A + 1"), ("C", "B * 2")])
        assert graph.reverse["C"] == {"A", "B"}
        assert "C" in graph.dependencies["B"]

    def test_evaluation_order(self):
        """Test that formula keys come after the formula keys they read."""
        graph = FormulaDependencyGraph.from_formulas(
            [("E", "D * 2"), ("D", "C / A"), ("C", "A - B")]
        )
        assert graph.get_evaluation_order({"C", "D", "E"}) == ["C", "D", "E"]

    def test_evaluation_order_independent_keys(self):
        """Test that unrelated keys come out sorted."""
        graph = FormulaDependencyGraph.from_formulas([("Y", "A"), ("X", "B")])
        assert graph.get_evaluation_order({"X", "Y"}) == ["X", "Y"]

    def test_evaluation_order_cycle(self):
        """Test that a cycle gives an empty order."""
        graph = FormulaDependencyGraph.from_formulas([("C", "D"), ("D", "C")])
        assert graph.get_evaluation_order({"C", "D"}) == []

    def test_repr(self):
        """Test the debug representation."""
        graph = FormulaDependencyGraph.from_formulas([("C", "A - B")])
        assert repr(graph) == "FormulaDependencyGraph(fields=1, edges=2)"
