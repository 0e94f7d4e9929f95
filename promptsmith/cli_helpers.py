"""CLI helper functions for rendering a synthesis in the terminal.

Used by the batch driver (``python -m promptsmith``) to show the assembled
prompt, the score panel, insights, improvements and keywords.
"""

from promptsmith.engine.synthesizer import SynthesisResult

RULE = "=" * 70

SEVERITY_ICONS = {
    "critical": "🛑",
    "warning": "⚠️ ",
    "info": "💡",
}

METRIC_LABELS = (
    ("clarity", "Clarity"),
    ("structure", "Structure"),
    ("specificity", "Specificity"),
    ("guardrails", "Guardrails"),
    ("creativity", "Creativity"),
)


def _bar(score: float, width: int = 20) -> str:
    filled = round(score * width)
    return "█" * filled + "░" * (width - filled)


def display_prompt(result: SynthesisResult) -> None:
    """Print the assembled prompt between rules."""
    print("\n" + RULE)
    print("📝 ASSEMBLED PROMPT")
    print(RULE)
    print(f"\n{result.prompt}" if result.prompt else "\n(empty prompt)")
    print("\n" + RULE)


def display_metrics(result: SynthesisResult) -> None:
    """Print the score panel.

    Example Output:
        📊 QUALITY SCORE: 72%
        Clarity      ████████████████░░░░  80%
        Structure    ████████████████████ 100%
        ...
        Word Count: 240 • Estimated Tokens: 312
    """
    metrics = result.metrics
    print("\n" + RULE)
    print(f"📊 QUALITY SCORE: {metrics.overall * 100:.0f}%")
    print(RULE)

    for key, label in METRIC_LABELS:
        score = getattr(metrics, key)
        print(f"{label:<12} {_bar(score)} {score * 100:>3.0f}%")

    print(f"\nWord Count: {metrics.word_count} • Estimated Tokens: {metrics.estimated_tokens}")
    print(RULE)


def display_insights(result: SynthesisResult) -> None:
    """Print insights, most severe first, then the appliable improvements."""
    print("\n" + RULE)
    print("🔍 INSIGHTS")
    print(RULE)

    if not result.insights:
        print("\n✅ Looking sharp - no issues detected")

    for idx, insight in enumerate(result.insights, start=1):
        icon = SEVERITY_ICONS.get(insight.severity.value, "•")
        print(f"\n{idx}. {icon} [{insight.severity.value.upper()}] {insight.title}")
        print(f"   {insight.detail}")
        if insight.suggestion:
            print(f"   ✏️  Suggestion: {insight.suggestion}")

    if result.improvements:
        print("\n" + "-" * 70)
        print("QUICK IMPROVEMENTS:")
        print("-" * 70)
        for improvement in result.improvements:
            print(f"  • [{improvement.target_section_id}] {improvement.title}: {improvement.snippet}")

    print("\n" + RULE)


def display_keywords(result: SynthesisResult) -> None:
    print("\n🏷️  Keywords: ", end="")
    if result.keywords:
        print(" ".join(f"#{keyword}" for keyword in result.keywords))
    else:
        print("(add content to surface themes)")


def display_synthesis(result: SynthesisResult) -> None:
    """Print the full report: prompt, metrics, insights and keywords."""
    display_prompt(result)
    display_metrics(result)
    display_insights(result)
    display_keywords(result)


def display_error(message: str) -> None:
    """Display error message in formatted style.

    Args:
        message: Error message to display
    """
    print("\n" + RULE)
    print("❌ ERROR")
    print(RULE)
    print(f"\n{message}")
    print("\n" + RULE)


def display_success(message: str) -> None:
    """Display success message in formatted style.

    Args:
        message: Success message to display
    """
    print("\n" + RULE)
    print("✅ SUCCESS")
    print(RULE)
    print(f"\n{message}")
    print("\n" + RULE)
