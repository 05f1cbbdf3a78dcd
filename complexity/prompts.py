"""
Prompt templates for the AI complexity report.

Minimal prompts focused only on complexity extraction.
"""


def build_system_prompt(language: str) -> str:
    """
    Build the system prompt for a given language.

    Args:
        language: Language tag of the code being reported on

    Returns:
        System prompt asking for the AIReport JSON shape
    """
    return f"""You are an expert algorithm analyst. Analyze the {language} code for time and space complexity.

## Rules:
1. Analyze the ENTIRE code as a whole
2. Use standard Big-O notation
3. Consider loops, recursion, and data structures
4. Keep suggestions short and actionable

Return ONLY this JSON structure (no other text):
{{
    "language": "{language}",
    "time": "O(...)",
    "space": "O(...)",
    "explanation": "Breakdown of the complexity",
    "suggestions": ["Tip 1", "Tip 2"]
}}
"""


def build_analysis_prompt(code: str) -> str:
    """
    Build the user prompt for the LLM.

    Args:
        code: Source code to analyze

    Returns:
        Formatted prompt string
    """
    return f"""Analyze time and space complexity. Return strict JSON.

CODE:
```
{code}
```
"""
