from complexity import analyze_complexity
from complexity.python_source import (
    RULES,
    PythonSignals,
    first_function,
    halves_with_divmod,
    has_comprehension,
    is_recursive,
    max_loop_nesting,
)
from complexity.rules import classify


BINARY_SEARCH = """def binary_search(arr, target):
    left, right = 0, len(arr) - 1
    while left <= right:
        mid = (left + right) // 2
        if arr[mid] == target:
            return mid
        elif arr[mid] < target:
            left = mid + 1
        else:
            right = mid - 1
    return -1"""

BUBBLE_SORT = """def bubble_sort(arr):
    for i in range(len(arr)):
        for j in range(len(arr) - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]"""


def test_factorial_recursion_is_linear():
    result = analyze_complexity("def fact(n):\n if n==0: return 1\n return n*fact(n-1)", "python")
    assert result.time == "O(N)"
    assert result.space == "O(N)"
    assert result.cyclomatic == 2
    assert result.maintainability == 93


def test_binary_search_is_logarithmic():
    result = analyze_complexity(BINARY_SEARCH, "python")
    assert result.time == "O(log N)"
    assert result.space == "O(1)"


def test_divmod_halving_counts_as_binary_search():
    code = "def bits(n):\n    while n:\n        n, r = divmod(n, 2)\n    return r"
    assert analyze_complexity(code, "python").time == "O(log N)"


def test_bubble_sort_is_quadratic():
    result = analyze_complexity(BUBBLE_SORT, "python")
    assert result.time == "O(N²)"
    assert result.space == "O(1)"
    # for, for, if
    assert result.cyclomatic == 4


def test_three_nested_loops_are_cubic():
    code = "for i in a:\n    for j in b:\n        for k in c:\n            total += 1"
    assert analyze_complexity(code, "python").time == "O(N³)"


def test_list_comprehension_makes_space_linear():
    result = analyze_complexity("def double(xs):\n    return [x * 2 for x in xs]", "python")
    assert result.time == "O(1)"
    assert result.space == "O(N)"


def test_list_builders_make_space_linear():
    assert analyze_complexity("seen = []", "python").space == "O(N)"
    assert analyze_complexity("items = list(source)", "python").space == "O(N)"
    assert analyze_complexity("total = 0", "python").space == "O(1)"


def test_comments_are_ignored():
    code = "# for i in range(n):\n#     for j in range(n):\nx = 1  # while True"
    result = analyze_complexity(code, "python")
    assert result.time == "O(1)"
    assert result.cyclomatic == 1


def test_cyclomatic_counts_python_keywords():
    code = """def load(path):
    try:
        with open(path) as f:
            if f and not f.closed or path:
                return f.read()
    except OSError:
        return None"""
    # with, if, and, or, except
    assert analyze_complexity(code, "python").cyclomatic == 6


def test_language_tag_is_case_insensitive():
    code = "for i in range(n):\n    print(i)"
    assert analyze_complexity(code, "Python") == analyze_complexity(code, " PYTHON ")
    assert analyze_complexity(code, "PYTHON").time == "O(N)"


# ============= Signal detectors =============


def test_first_function_body_stops_at_column_zero():
    code = "def f(n):\n    a = 1\n\n    # note\n    return a\nx = f(2)"
    name, body = first_function(code)
    assert name == "f"
    assert body == ["    a = 1", "    return a"]


def test_first_function_without_def():
    assert first_function("x = 1") == (None, [])


def test_recursion_is_scoped_to_first_function():
    code = "def helper(x):\n    return x + 1\n\ndef walk(n):\n    return walk(n - 1)"
    assert not is_recursive(code)


def test_module_level_call_is_not_recursion():
    assert not is_recursive("def f(n):\n    return n\n\nf(3)")


def test_method_recursion_through_self():
    code = "class Solution:\n    def depth(self, node):\n        return 1 + self.depth(node.left)"
    assert is_recursive(code)
    result = analyze_complexity(code, "python")
    assert (result.time, result.space) == ("O(N)", "O(N)")


def test_plain_recursion():
    code = "def outer(n):\n    if n:\n        return outer(n - 1)\n    return 0"
    assert is_recursive(code)
    assert not is_recursive(code.replace("outer(n - 1)", "outer_helper(n - 1)"))


def test_top_level_loops_reset_nesting():
    code = "for i in a:\n    pass\nfor j in b:\n    pass"
    assert max_loop_nesting(code) == 1


def test_sibling_loops_inside_a_function_accumulate():
    code = "def f(a, b):\n    for i in a:\n        pass\n    for j in b:\n        pass"
    assert max_loop_nesting(code) == 2


# ============= Decision list =============


def test_rule_order():
    assert classify(RULES, PythonSignals(is_binary_search=True, max_loop_nesting=3)).rule == "binary_search"
    assert classify(RULES, PythonSignals(is_recursive=True, max_loop_nesting=2)).time == "O(N²)"
    assert classify(RULES, PythonSignals(is_recursive=True)).rule == "recursion"
    assert classify(RULES, PythonSignals()).time == "O(1)"


def test_async_def_recursion():
    code = "async def crawl(url, depth):\n    if depth:\n        await crawl(url, depth - 1)"
    assert first_function(code)[0] == "crawl"
    result = analyze_complexity(code, "python")
    assert (result.time, result.space) == ("O(N)", "O(N)")


def test_top_level_async_def_does_not_reset_nesting():
    code = "for i in a:\nasync def f():\n    for j in b:\n        pass"
    assert max_loop_nesting(code) == 2


def test_divmod_uses_first_closing_paren():
    assert halves_with_divmod("q, r = divmod(n, 2)")
    assert halves_with_divmod("q, r = divmod(n,\n    2 )")
    assert not halves_with_divmod("q, r = divmod(n, 3)")
    assert not halves_with_divmod("q, r = divmod(n, 12)")
    # The first ")" closes len(, so the 2 is never seen.
    assert not halves_with_divmod("q, r = divmod(len(xs), 2)")
    assert halves_with_divmod("divmod(divmod(a, 2)")
    assert not halves_with_divmod("divmod(a, 2")


def test_comprehension_needs_for_then_in_inside_one_group():
    assert has_comprehension("[x for x in xs]")
    assert has_comprehension("[[x for x in row] for row in grid]")
    assert not has_comprehension("[x in xs for x]")
    assert not has_comprehension("[for] [in]")
    assert not has_comprehension("[x for x in xs")
