"""Instruction payloads sent to the translation, judge and detection models.

Templates are plain ``str.format`` strings filled from a LanguageProfile.
Literal braces in the localization prompt are doubled.
"""

from __future__ import annotations

from typing import Literal

from transarena.schemas import LanguageProfile

PromptStyle = Literal["localization", "comparison"]

LOCALIZATION_SYSTEM_PROMPT = """\
You are a professional, high-accuracy software localization and technical documentation translator.

PRIMARY GOAL
- Translate the source text to the target language with at least 90% semantic accuracy.
- Preserve the exact meaning, intent, and logical conditions of the original text.
- Prefer correctness of meaning over literal, word-by-word translation.
- Your primary domain is enterprise software (e.g., PLM systems such as Siemens Teamcenter) and other technical applications.

TARGET LANGUAGE PROFILE
- Target language: {language} ({native_name})
- Script: {script}
- Language-specific rules and conventions: {conventions}

STRICT OUTPUT RULES
- Output ONLY the translated text.
- Do NOT add labels like "Translation:", quotes, explanations, or alternatives.
- If the input is already fully in the target language, return it unchanged.
- Preserve paragraphs, line breaks, lists, Markdown/HTML structure, and code blocks.

TERMINOLOGY AND NAMES
- NEVER translate product, platform, company, or brand names (Teamcenter, Active Workspace, NX, Windows, Linux).
- NEVER translate protocol or technology names (HTTP, REST, JSON, XML, SQL, OAuth) or programming languages and APIs.
- Keep standard English PLM terms (Item, Item Revision, Change Notice, Workflow, BOM, Dataset) where the target UI conventionally keeps them.

VARIABLES, PLACEHOLDERS, AND SPECIAL TOKENS
- NEVER translate, remove, or change placeholders and variables: {{0}}, {{1}}, {{name}}, {{{{value}}}}, %s, %d, %1.
- Keep IDs, keys, and internal codes (TC_ITEM, STATUS_RELEASED, ERROR_404) unchanged.
- Do NOT translate inline code, fenced code, HTML tags and attributes, or JSON/XML keys.

MEANING, LOGIC, AND CONDITIONS
- Preserve negations, conditionals, and comparisons exactly. Do NOT invert, weaken, or strengthen them.
- Keep numbers, units, percentages, version numbers, and limits exactly as in the source.

TONE AND REGISTER
- Clear, concise, professional technical tone. Action-oriented phrasing for UI commands.

The result must read as if written by a native professional user of {language} ({native_name}), in correct {script}."""

COMPARISON_SYSTEM_PROMPT = """\
Translate into {language} ({native_name}).
Script: {script}. Conventions: {conventions}
Return ONLY the translation."""

TRANSLATION_USER_TEMPLATE = "Translate this text into {language} ({native_name}).\n\n{text}"

JUDGE_SYSTEM_PROMPT = """\
You are a neutral professional translation evaluator.

Evaluate both candidate translations of the original text on:
- Meaning preservation
- Fluency
- Accuracy
- Naturalness

The order of the candidates carries no information. Judge each on its own merits.

Return ONLY valid JSON, with no surrounding text:
{fields}"""

JUDGE_FIELDS = """\
{
  "scoreA": number (0-100),
  "scoreB": number (0-100),
  "semanticSimilarity": number (0-100, how close the two candidates are in meaning),
  "winner": "A" or "B" or "Tie",
  "reasoning": "brief explanation\""""

JUDGE_BACK_TRANSLATION_FIELDS = """,
  "backTranslationA": "Translation A translated back into {source_language}",
  "backTranslationB": "Translation B translated back into {source_language}\""""

JUDGE_USER_TEMPLATE = """\
Original Text:
{original}

Translation A:
{candidate_a}

Translation B:
{candidate_b}"""

DETECTION_SYSTEM_PROMPT = """\
You are a language identification system.
Identify the language of the user's text.
Answer with exactly one of these names, and nothing else: {choices}.
If the language is not in that list, or you cannot tell, answer: Unknown"""


def build_translation_prompt(
    profile: LanguageProfile,
    text: str,
    style: PromptStyle = "comparison",
) -> tuple[str, str]:
    """Return (system_prompt, user_message) for translating ``text`` into ``profile``."""
    template = LOCALIZATION_SYSTEM_PROMPT if style == "localization" else COMPARISON_SYSTEM_PROMPT
    fields = {
        "language": profile.name,
        "native_name": profile.native_name,
        "script": profile.script,
        "conventions": profile.conventions,
    }
    system_prompt = template.format(**fields)
    user_message = TRANSLATION_USER_TEMPLATE.format(text=text, **fields)
    return system_prompt, user_message


def build_judge_prompt(
    original: str,
    candidate_a: str,
    candidate_b: str,
    back_translate_to: str | None = None,
) -> tuple[str, str]:
    """Return (system_prompt, user_message) asking the judge for a JSON verdict."""
    fields = JUDGE_FIELDS
    if back_translate_to:
        fields = fields + JUDGE_BACK_TRANSLATION_FIELDS.format(source_language=back_translate_to)
    fields += "\n}"
    system_prompt = JUDGE_SYSTEM_PROMPT.format(fields=fields)
    user_message = JUDGE_USER_TEMPLATE.format(
        original=original, candidate_a=candidate_a, candidate_b=candidate_b
    )
    return system_prompt, user_message


def judge_output_schema(with_back_translations: bool = False) -> dict:
    properties = {
        "scoreA": {"type": "number"},
        "scoreB": {"type": "number"},
        "semanticSimilarity": {"type": "number"},
        "winner": {"type": "string", "enum": ["A", "B", "Tie"]},
        "reasoning": {"type": "string"},
    }
    required = ["scoreA", "scoreB", "semanticSimilarity", "winner", "reasoning"]
    if with_back_translations:
        properties["backTranslationA"] = {"type": "string"}
        properties["backTranslationB"] = {"type": "string"}
        required += ["backTranslationA", "backTranslationB"]
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


def build_detection_prompt(choices: list[str]) -> str:
    return DETECTION_SYSTEM_PROMPT.format(choices=", ".join(choices))
