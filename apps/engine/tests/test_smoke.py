def test_engine_imports():
    """Verify all engine subpackages can be imported without errors."""
    import perfpilot.analyzer
    import perfpilot.bundle
    import perfpilot.llm
    import perfpilot.recommendations
    import perfpilot.rules
    import perfpilot.scoring

    assert perfpilot.rules.PERFORMANCE_RULES


def test_end_to_end_example():
    """A small page exercising code analysis, bundle analysis and scoring together."""
    from perfpilot.analyzer import analyze_code
    from perfpilot.bundle import analyze_bundle
    from perfpilot.scoring import calculate_performance_score, combine_scores, score_label

    page = (
        "import _ from 'lodash';\n"
        "export const metadata = { title: 'Home' };\n"
        "export const experimental_ppr = true;\n"
        "export default function HomePage() {\n"
        "  return <img src='/hero.jpg' alt='Hero' />;\n"
        "}\n"
    )
    analysis = analyze_code(page, "page.tsx")
    bundle = analyze_bundle('{"dependencies": {"lodash": "^4.17.21"}}', files={"page.tsx": page})

    assert [f.rule.id for f in analysis.issues] == ["img-tag-usage"]
    assert bundle.score == 95
    assert len(bundle.treeshaking_issues) == 1

    score = combine_scores(calculate_performance_score(analysis.summary), bundle.score)
    # (90 + 95) / 2 = 92.5, rounded half up
    assert score == 93
    assert score_label(score) == "Excellent"
