"""
Display formatters for the correlation heatmap.
Deterministic colour mapping and markdown rendering of engine output.
"""

from typing import Any, Dict, List, Optional, Sequence


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def correlation_color(value: Optional[float]) -> str:
    """
    Map a correlation to an RGB colour.

    Positive values fade from white to blue, negative values from white
    to red. Intensity is |value| * 255, capped at 255.

    Args:
        value: Correlation coefficient (None is treated as 0)

    Returns:
        CSS colour string, e.g. "rgb(0, 0, 255)"
    """
    value = _coerce(value)
    intensity = round(min(abs(value) * 255, 255))
    faded = 255 - intensity

    if value > 0:
        return f"rgb({faded}, {faded}, 255)"
    return f"rgb(255, {faded}, {faded})"


def text_color(value: Optional[float]) -> str:
    """Readable text colour on top of ``correlation_color(value)``."""
    return "white" if abs(_coerce(value)) > 0.5 else "black"


def format_correlation(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Format a correlation coefficient with fixed precision.

    Args:
        value: Correlation coefficient (None is treated as 0)
        decimal_places: Number of decimal places (default: 2)

    Returns:
        Formatted string (e.g., "-0.87")
    """
    return f"{_coerce(value):.{decimal_places}f}"


def display_name(company_name: Optional[str], fallback: str = "") -> str:
    """
    Short display name: text before the first comma.

    "Apple Inc., Class A" -> "Apple Inc."
    """
    if not company_name:
        return fallback
    return company_name.split(',')[0].strip()


def format_heatmap_cell(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Coloured heatmap cell: the formatted value wrapped in an inline-styled span.

    -1.0 -> <span style="background-color:rgb(255, 0, 0);color:white">-1.00</span>
    """
    return (
        f'<span style="background-color:{correlation_color(value)};'
        f'color:{text_color(value)}">'
        f"{format_correlation(value, decimal_places)}</span>"
    )


def render_matrix_markdown(
    tickers: Sequence[str],
    matrix: Sequence[Sequence[float]],
    colored: bool = True
) -> str:
    """
    Render the correlation matrix as a markdown table.

    Cells are coloured with ``format_heatmap_cell`` unless ``colored`` is False.

    Raises:
        FormatterError: If the matrix is not square or does not match tickers
    """
    if len(matrix) != len(tickers) or any(len(row) != len(tickers) for row in matrix):
        raise FormatterError(
            f"Matrix shape does not match {len(tickers)} tickers"
        )

    if not tickers:
        return "_No instruments._"

    lines = [
        "| | " + " | ".join(tickers) + " |",
        "|---|" + "---|" * len(tickers)
    ]

    for ticker, row in zip(tickers, matrix):
        cell = format_heatmap_cell if colored else format_correlation
        cells = " | ".join(cell(v) for v in row)
        lines.append(f"| **{ticker}** | {cells} |")

    return "\n".join(lines)


def render_stats_markdown(
    stats: Sequence[Dict[str, Any]],
    names: Optional[Dict[str, Optional[str]]] = None
) -> str:
    """Render per-instrument statistics as a markdown table."""
    names = names or {}

    lines = [
        "| Ticker | Name | Average | Std Dev |",
        "|---|---|---|---|"
    ]

    for row in stats:
        ticker = row['id']
        name = display_name(names.get(ticker), fallback=ticker)
        lines.append(f"| {ticker} | {name} | ${row['average']:.2f} | {row['std_dev']:.4f} |")

    return "\n".join(lines)


def render_heatmap_report(summary: Dict[str, Any]) -> str:
    """
    Render a heatmap job summary as a markdown document.

    Args:
        summary: Output of ``run_heatmap``

    Returns:
        Markdown report
    """
    sections: List[str] = [
        f"# Correlation Heatmap - Last {summary['minutes']} Minutes",
        "",
        "## Statistics",
        "",
        render_stats_markdown(summary['stats'], summary.get('names')),
        "",
        "## Correlation Matrix",
        "",
        render_matrix_markdown(summary['tickers'], summary['matrix'])
    ]

    failed = summary.get('failed_tickers') or []
    if failed:
        sections.extend([
            "",
            f"_Price fetch failed for: {', '.join(failed)} (treated as empty series)._"
        ])

    return "\n".join(sections) + "\n"


def _coerce(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Correlation value must be numeric, got {type(value)}")
    return float(value)
