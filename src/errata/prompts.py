# src/errata/prompts.py
"""Prompt templates for image analysis and similar-question generation.

The adapters treat these as opaque text producers. Pass ``provider_hints``
to append vendor-specific instructions.
"""

from __future__ import annotations

from errata.models import SUBJECTS, Difficulty, Language

ANALYZE_LANGUAGE_INSTRUCTIONS: dict[str, str] = {
    "zh": (
        "IMPORTANT: For the 'analysis' field, use Simplified Chinese. For 'questionText' "
        "and 'answerText', YOU MUST USE THE SAME LANGUAGE AS THE ORIGINAL QUESTION. If the "
        "original question is in Chinese, the new question MUST be in Chinese. If the "
        "original is in English, keep it in English."
    ),
    "en": "Please ensure all text fields are in English.",
}

SIMILAR_LANGUAGE_INSTRUCTIONS: dict[str, str] = {
    "zh": (
        "IMPORTANT: Generate the new question in Simplified Chinese. The new question MUST "
        "use the SAME LANGUAGE as the original question."
    ),
    "en": "Please ensure the generated question is in English.",
}

DIFFICULTY_INSTRUCTIONS: dict[str, str] = {
    "easy": "Make the new question EASIER than the original. Use simpler numbers and more "
    "direct concepts.",
    "medium": "Keep the difficulty SIMILAR to the original question.",
    "hard": "Make the new question HARDER than the original. Combine multiple concepts or "
    "use more complex numbers.",
    "harder": "Make the new question MUCH HARDER (Challenge Level). Require deeper "
    "understanding and multi-step reasoning.",
}

ANALYZE_PROMPT = """You are an experienced, professional interdisciplinary exam analysis expert. \
Thoroughly analyze the exam question image provided by the user, comprehend all textual \
information, diagrams and implicit constraints, and deliver a complete, highly structured, \
professional solution.

{language_instruction}

**CRITICAL: Extract the EXACT TEXT as it appears in the image, NOT a description of what you see.**

Return the following fields as a valid JSON object:
1. "questionText": The full text of the question. Use Markdown. Use LaTeX for formulas \
(inline: $formula$, block: $$formula$$).
2. "answerText": The correct answer. Use Markdown and LaTeX where appropriate.
3. "analysis": A step-by-step explanation of how to solve the problem.
   - Use Markdown formatting (headings, lists, bold) for clarity
   - Use LaTeX for all formulas, e.g. "$x = \\\\frac{{-b \\\\pm \\\\sqrt{{b^2 - 4ac}}}}{{2a}}$"
4. "subject": ONE of: {subjects}.
5. "knowledgePoints": An array of at most 5 knowledge points. STRICTLY use exact terms \
from this list:

   **数学 (Math):**
   - 方程: "一元一次方程", "一元二次方程", "二元一次方程组", "分式方程"
   - 几何: "勾股定理", "相似三角形", "全等三角形", "圆", "三视图", "平行四边形", "矩形", "菱形"
   - 函数: "二次函数", "一次函数", "反比例函数", "二次函数的图像", "二次函数的性质"
   - 数值: "绝对值", "有理数", "实数", "科学计数法"
   - 统计: "概率", "平均数", "中位数", "方差"

   **物理 (Physics):**
   - 力学: "匀速直线运动", "变速运动", "牛顿第一定律", "牛顿第二定律", "牛顿第三定律", "力", "压强", "浮力"
   - 电学: "欧姆定律", "串联电路", "并联电路", "电功率", "电功"
   - 光学: "光的反射", "光的折射", "凸透镜", "凹透镜"
   - 热学: "温度", "内能", "比热容", "热机效率"

   **化学 (Chemistry):**
   - "化学方程式", "氧化还原反应", "酸碱盐", "中和反应", "金属", "非金属", "溶解度"

   **英语 (English):**
   - "语法", "词汇", "阅读理解", "完形填空", "写作", "听力", "翻译"

   For other subjects use appropriate general tags (e.g. "历史事件", "地理常识", "古诗文").

CRITICAL FORMATTING REQUIREMENTS:
- Return ONLY the JSON object, nothing before or after it
- Do NOT wrap the JSON in markdown code blocks
- Do NOT include HTML tags in the extracted text
- Escape every backslash in LaTeX (write \\\\\\\\ instead of \\\\)
- NO literal newlines in strings. Use \\\\n for newlines.

- If the image contains one question with sub-questions ((1), (2), ...), include ALL of them \
in questionText.
- If the image contains separate questions, analyze only the first complete one.
- If the image is unclear or contains no question, return empty strings but valid JSON.
{provider_hints}"""

SIMILAR_QUESTION_PROMPT = """You are an expert AI tutor creating practice problems for \
middle school students. Create a NEW practice problem based on the original question and \
knowledge points below.

DIFFICULTY LEVEL: {difficulty_label}
{difficulty_instruction}

{language_instruction}

Original Question: "{original_question}"
Knowledge Points: {knowledge_points}

Return a valid JSON object with these fields:
1. "questionText": The new question. If the original is multiple-choice, include the \
options (A, B, C, D), separated with \\\\n.
2. "answerText": The correct answer.
3. "analysis": Step-by-step solution.
4. "subject": The subject of the original question.
5. "knowledgePoints": The knowledge points (should match the input).

CRITICAL FORMATTING:
- Return ONLY the JSON object, no extra text
- Do NOT wrap in markdown code blocks
- Properly escape all backslashes in LaTeX
- No literal newlines in strings
{provider_hints}"""


def _check_language(language: str) -> None:
    if language not in ANALYZE_LANGUAGE_INSTRUCTIONS:
        raise ValueError(f"Unknown language '{language}'. Expected one of: zh, en")


def generate_analyze_prompt(language: Language, provider_hints: str | None = None) -> str:
    """Build the prompt for transcribing and analyzing a question image."""
    _check_language(language)
    return ANALYZE_PROMPT.format(
        language_instruction=ANALYZE_LANGUAGE_INSTRUCTIONS[language],
        subjects=", ".join(f'"{subject}"' for subject in SUBJECTS),
        provider_hints=f"\n{provider_hints}" if provider_hints else "",
    ).strip()


def generate_similar_question_prompt(
    language: Language,
    original_question: str,
    knowledge_points: list[str],
    difficulty: Difficulty = "medium",
    provider_hints: str | None = None,
) -> str:
    """Build the prompt for generating a practice question like the original.

    Raises:
        ValueError: If ``language`` or ``difficulty`` is unknown.
    """
    _check_language(language)
    if difficulty not in DIFFICULTY_INSTRUCTIONS:
        raise ValueError(
            f"Unknown difficulty '{difficulty}'. "
            f"Available: {list(DIFFICULTY_INSTRUCTIONS.keys())}"
        )

    return SIMILAR_QUESTION_PROMPT.format(
        difficulty_label=difficulty.upper(),
        difficulty_instruction=DIFFICULTY_INSTRUCTIONS[difficulty],
        language_instruction=SIMILAR_LANGUAGE_INSTRUCTIONS[language],
        original_question=original_question,
        knowledge_points=", ".join(knowledge_points),
        provider_hints=f"\n{provider_hints}" if provider_hints else "",
    ).strip()


class PromptBuilder:
    """Prompt collaborator handed to the provider adapters.

    Subclass (or pass any object with the same two methods) to swap the
    wording without touching the adapters.

    Args:
        provider_hints: Extra instructions appended to every prompt.
    """

    def __init__(self, provider_hints: str | None = None) -> None:
        self.provider_hints = provider_hints

    def analyze(self, language: Language) -> str:
        return generate_analyze_prompt(language, self.provider_hints)

    def similar_question(
        self,
        language: Language,
        original_question: str,
        knowledge_points: list[str],
        difficulty: Difficulty,
    ) -> str:
        return generate_similar_question_prompt(
            language, original_question, knowledge_points, difficulty, self.provider_hints
        )
