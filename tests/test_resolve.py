from octoflow.resolve import BracketedMatch, ExactMatch, PrefixMatch, Unresolved, resolve

from tests.factories import make_job


class TestResolve:
    def test_exact_beats_prefix_and_bracket(self):
        nodes = [
            make_job(1, "build (linux)"),
            make_job(2, "build-docs"),
            make_job(3, "build"),
        ]
        result = resolve("build", nodes)
        assert isinstance(result, ExactMatch)
        assert result.node.id == 3

    def test_prefix_match_first_in_input_order(self):
        nodes = [make_job(1, "lint"), make_job(2, "test-unit"), make_job(3, "test-e2e")]
        result = resolve("test", nodes)
        assert isinstance(result, PrefixMatch)
        assert result.node.id == 2

    def test_matrix_name_is_bracketed_match(self):
        nodes = [make_job(1, "build"), make_job(7, "deploy (prod)")]
        result = resolve("deploy", nodes)
        assert isinstance(result, BracketedMatch)
        assert result.matched
        assert result.node.id == 7

    def test_first_prefix_hit_wins_over_later_matrix_name(self):
        nodes = [make_job(1, "deployer"), make_job(2, "deploy (prod)")]
        result = resolve("deploy", nodes)
        assert isinstance(result, PrefixMatch)
        assert result.node.id == 1

    def test_unresolved(self):
        result = resolve("publish", [make_job(1, "build")])
        assert result == Unresolved("publish")
        assert not result.matched
        assert result.node is None

    def test_case_sensitive(self):
        assert isinstance(resolve("Build", [make_job(1, "build")]), Unresolved)

    def test_empty_id_does_not_match_everything(self):
        assert isinstance(resolve("", [make_job(1, "build")]), Unresolved)

    def test_no_nodes(self):
        assert isinstance(resolve("build", []), Unresolved)
