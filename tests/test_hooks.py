"""
Tests for static hook-usage analysis.
"""

import pytest
from helix.forms import Keyword, Symbol
from helix.hooks import HookSignature, find_hooks, is_hook
from helix.reader import read_string


def hooks_in(source: str) -> list[str]:
	return [call[0].full_name for call in find_hooks(read_string(source))]


class TestIsHook:
	@pytest.mark.parametrize(
		"sym", ["use", "use-state", "useEffect", "hooks/use-memo", "useCallback"]
	)
	def test_hook_names(self, sym: str):
		assert is_hook(Symbol.parse(sym))

	@pytest.mark.parametrize("sym", ["user", "used", "reuse-x", "usestate", "do"])
	def test_not_hooks(self, sym: str):
		assert not is_hook(Symbol.parse(sym))

	def test_only_symbols(self):
		assert not is_hook(Keyword("use-state"))
		assert not is_hook("use-state")


class TestFindHooks:
	def test_depth_first_left_to_right(self):
		source = """
		(let [[a set-a] (use-state 0)
		      b (use-memo (fn [] (use-context ctx)) [])]
		  (use-effect (fn [] nil) [a]))
		"""
		assert hooks_in(source) == ["use-state", "use-memo", "use-context", "use-effect"]

	def test_duplicates_kept(self):
		assert hooks_in("(use-ref nil) (use-ref 1)") == ["use-ref", "use-ref"]

	def test_inside_maps_vectors_and_sets(self):
		assert hooks_in("[{:a (use-a)} #{(use-b)}]") == ["use-a", "use-b"]

	def test_head_position_only(self):
		assert hooks_in("(f use-state)") == []

	def test_non_hook_edits_keep_order(self):
		before = hooks_in("(use-a) (use-b)")
		after = hooks_in("(use-a) (println 1) (do (use-b))")
		assert before == after

	def test_deterministic(self):
		body = read_string("(use-state 0) (use-effect (fn [] nil) [])")
		assert find_hooks(body) == find_hooks(body)


class TestHookSignature:
	def test_key_is_concatenated_forms(self):
		sig = HookSignature.of(read_string("(use-state 0) (f (use-ref nil))"))
		assert sig.key == "(use-state 0)(use-ref nil)"
		assert len(sig) == 2

	def test_empty(self):
		sig = HookSignature.of(read_string('($ "div")'))
		assert sig.key == ""
		assert len(sig) == 0

	def test_digest_stable(self):
		a = HookSignature.of(read_string("(use-state 0)"))
		b = HookSignature.of(read_string("(do (println 1) (use-state 0))"))
		assert a.digest == b.digest
		assert len(a.digest) == 40
		c = HookSignature.of(read_string("(use-state 1)"))
		assert c.digest != a.digest
