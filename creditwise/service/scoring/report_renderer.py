"""
Report Renderer for the CreditWise Alternative Credit Score.

Turns a ReportModel into a paginated A4 PDF with a fixed section order:
1. Cover page with the score and grade
2. Executive summary (financial overview, loan eligibility, insights)
3. Credit factors breakdown
4. Personalized recommendations
5. Grade interpretation legend
6. Disclaimer

Every section starts on a new page; inside a section reportlab's frame
flow breaks pages automatically and recommendation blocks are kept
together. The renderer is presentation-only: it formats the values in
the model and never recomputes a score.
"""

from io import BytesIO
from typing import List, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, StyleSheet1, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import (
    Flowable,
    KeepTogether,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .grades import GRADE_BANDS
from .models import Priority, RiskGrade
from .report_model import ReportModel
from .settings import ScoringSettings, scoring_settings


BRAND_FOOTER = "CreditWise - Alternative Credit Scoring"

SECTION_TITLES: Tuple[str, ...] = (
    "Credit Score Report",
    "Executive Summary",
    "Credit Factors Breakdown",
    "Personalized Recommendations",
    "Understanding Your Grade",
    "Important Disclaimer",
)

PRIMARY = colors.HexColor("#1e40af")
SUCCESS = colors.HexColor("#15803d")
WARNING = colors.HexColor("#c2410c")
DANGER = colors.HexColor("#b91c1c")
MUTED = colors.HexColor("#6b7280")
LIGHT = colors.HexColor("#f3f4f6")

GRADE_COLORS = {
    RiskGrade.A: SUCCESS,
    RiskGrade.B_PLUS: PRIMARY,
    RiskGrade.B: PRIMARY,
    RiskGrade.C: WARNING,
    RiskGrade.D: DANGER,
}

PRIORITY_COLORS = {
    Priority.HIGH: DANGER,
    Priority.MEDIUM: WARNING,
    Priority.LOW: PRIMARY,
}

TABLE_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, LIGHT]),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
]


def factor_status(score: int) -> str:
    """Display label for a raw factor score."""
    if score >= 80:
        return "Excellent"
    elif score >= 60:
        return "Good"
    elif score >= 40:
        return "Fair"
    else:
        return "Needs Work"


def _styles() -> StyleSheet1:
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="CoverTitle", parent=styles["Title"], fontSize=26, leading=32,
        textColor=PRIMARY,
    ))
    styles.add(ParagraphStyle(
        name="Centered", parent=styles["Normal"], alignment=TA_CENTER,
    ))
    styles.add(ParagraphStyle(
        name="ScoreValue", parent=styles["Title"], fontSize=64, leading=72,
    ))
    styles.add(ParagraphStyle(
        name="Grade", parent=styles["Title"], fontSize=22, leading=28,
    ))
    styles.add(ParagraphStyle(
        name="Small", parent=styles["Normal"], fontSize=8, leading=10,
        textColor=MUTED,
    ))
    styles.add(ParagraphStyle(
        name="Box", parent=styles["Normal"], backColor=LIGHT,
        borderPadding=8, spaceBefore=6, spaceAfter=12,
    ))
    return styles


class ReportRenderer:
    """Builds the flowables for one report model."""

    def __init__(self, model: ReportModel, settings: ScoringSettings = scoring_settings):
        self._model = model
        self._settings = settings
        self._styles = _styles()

    # ---------------------------------------------------------------- helpers

    def _money(self, amount: float) -> str:
        return f"{self._model.summary.currency} {amount:,.2f}"

    def _p(self, text: str, style: str = "Normal") -> Paragraph:
        return Paragraph(text, self._styles[style])

    def _text(self, text: str, style: str = "Normal") -> List[Flowable]:
        """Paragraphs for free text, one per line, with markup escaped."""
        return [
            self._p(escape(line), style)
            for line in text.splitlines()
            if line.strip()
        ]

    def _table(self, rows: Sequence[Sequence], col_widths=None) -> Table:
        table = Table(list(rows), colWidths=col_widths, repeatRows=1, hAlign="LEFT")
        table.setStyle(TableStyle(TABLE_STYLE))
        return table

    def _heading(self, title: str) -> Paragraph:
        return self._p(escape(title), "Heading1")

    # --------------------------------------------------------------- sections

    def cover(self) -> List[Flowable]:
        summary = self._model.summary
        score = self._model.score
        grade_color = GRADE_COLORS[score.risk_grade].hexval()[2:]

        details = Table(
            [
                ["Report ID", summary.report_id],
                ["Generated", summary.generated_at.strftime("%B %d, %Y")],
                ["Valid Until", summary.valid_until.strftime("%B %d, %Y")],
                ["Assessment Period", f"{summary.period.start} to {summary.period.end}"],
            ],
            colWidths=[5 * cm, 9 * cm],
        )
        details.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("LINEBELOW", (0, 0), (-1, -2), 0.5, colors.lightgrey),
        ]))

        return [
            Spacer(1, 2 * cm),
            self._p("CREDIT SCORE REPORT", "CoverTitle"),
            self._p("Alternative Credit Analysis for Informal Economy", "Centered"),
            Spacer(1, 2 * cm),
            self._p(f'<font color="#{grade_color}">{score.total}</font>', "ScoreValue"),
            self._p(f"out of {score.max_score}", "Centered"),
            Spacer(1, 0.6 * cm),
            self._p(
                f'<font color="#{grade_color}">Grade {escape(score.risk_grade.value)}</font>',
                "Grade",
            ),
            self._p(escape(score.description), "Centered"),
            Spacer(1, 2 * cm),
            details,
        ]

    def executive_summary(self) -> List[Flowable]:
        model = self._model
        metrics = model.financial_metrics
        analysis = model.transaction_analysis
        loan = model.loan_eligibility
        period = model.summary.period

        story: List[Flowable] = [
            self._heading("Executive Summary"),
            self._p(
                f"Based on {model.summary.transaction_count} transactions over "
                f"{period.months} month(s) ({period.start} to {period.end}), your "
                f"alternative credit score is <b>{model.score.total}</b> "
                f"(Grade {escape(model.score.risk_grade.value)}, "
                f"{escape(model.score.description)})."
            ),
            Spacer(1, 0.4 * cm),
            self._p(
                f"<b>Transaction Analysis</b><br/>"
                f"Total transactions: {analysis.total_transactions} "
                f"({analysis.income_transactions} income, "
                f"{analysis.expense_transactions} expense)<br/>"
                f"Average daily transactions: {analysis.avg_daily_transactions:g}<br/>"
                f"Documented transactions: {analysis.verified_transactions} "
                f"({analysis.documentation_rate:g}%)",
                "Box",
            ),
            self._p("Financial Overview", "Heading2"),
            self._table([
                ["Metric", "Value"],
                ["Total Income", self._money(metrics.total_income)],
                ["Total Expenses", self._money(metrics.total_expenses)],
                ["Net Profit", self._money(metrics.net_profit)],
                ["Profit Margin", f"{metrics.profit_margin:g}%"],
                ["Average Monthly Income", self._money(metrics.avg_monthly_income)],
                ["Average Monthly Expenses", self._money(metrics.avg_monthly_expenses)],
                ["Average Monthly Profit", self._money(metrics.avg_monthly_profit)],
                ["Current Balance", self._money(metrics.current_balance)],
                ["Emergency Buffer", f"{metrics.emergency_buffer_months:g} months"],
            ], col_widths=[8 * cm, 6 * cm]),
            self._p("Loan Eligibility", "Heading2"),
            self._table([
                ["Estimate", "Value"],
                ["Risk Level", loan.risk_level.value.title()],
                ["Maximum Loan Amount", self._money(loan.max_amount)],
                ["Interest Rate", loan.interest_rate],
                ["Monthly Repayment Capacity", self._money(loan.monthly_repayment_capacity)],
                ["Recommended Tenure", loan.recommended_tenure],
                ["Approval Probability", f"{loan.approval_probability:g}%"],
            ], col_widths=[8 * cm, 6 * cm]),
        ]

        if model.monthly_breakdown:
            story.append(self._p("Monthly Breakdown", "Heading2"))
            story.append(self._table(
                [["Month", "Income", "Expenses", "Net Profit", "Txns", "Balance"]]
                + [
                    [
                        m.month,
                        f"{m.income:,.2f}",
                        f"{m.expenses:,.2f}",
                        f"{m.net_profit:,.2f}",
                        str(m.transaction_count),
                        f"{m.balance:,.2f}",
                    ]
                    for m in model.monthly_breakdown
                ]
            ))

        if model.categories:
            story.append(self._p("Top Categories", "Heading2"))
            story.append(self._table(
                [["Category", "Type", "Count", "Amount"]]
                + [
                    [c.name, c.type.value.title(), str(c.count), self._money(c.amount)]
                    for c in model.categories[:10]
                ]
            ))

        story.append(self._p("Payment Methods", "Heading2"))
        story.append(self._table(
            [["Method", "Count", "Amount", "Share"]]
            + [
                [pm.name, str(pm.count), self._money(pm.amount), f"{pm.percentage:g}%"]
                for pm in model.payment_methods
            ]
        ))

        if model.insights:
            story.append(self._p("Key Insights", "Heading2"))
            for insight in model.insights:
                story.append(self._p(
                    f"<b>{escape(insight.title)}</b> ({insight.type}): "
                    f"{escape(insight.description)}"
                ))
        return story

    def factor_breakdown(self) -> List[Flowable]:
        score = self._model.score
        rows = [["Factor", "Weight", "Score", "Points", "Status"]] + [
            [
                c.label,
                f"{c.weight}%",
                f"{c.score}/100",
                f"{c.points:g}",
                factor_status(c.score),
            ]
            for c in score.components
        ]

        story: List[Flowable] = [
            self._heading("Credit Factors Breakdown"),
            self._p(
                "Your score combines five factors measured from your own "
                "transactions. Each factor is scored from 0 to 100 and weighted."
            ),
            Spacer(1, 0.4 * cm),
            self._table(rows, col_widths=[5.5 * cm, 2 * cm, 2.5 * cm, 2 * cm, 3 * cm]),
            Spacer(1, 0.4 * cm),
            self._p("How Your Score Was Calculated", "Heading2"),
        ]
        story.extend(self._text(score.score_breakdown))
        story.append(Spacer(1, 0.3 * cm))
        story.append(self._p(
            f"<b>Total Weighted Score: {score.total}/{score.max_score} points</b>"
        ))
        return story

    def recommendations(self) -> List[Flowable]:
        story: List[Flowable] = [self._heading("Personalized Recommendations")]

        if not self._model.recommendations:
            story.append(self._p(
                "Excellent! Your credit profile is strong across all factors.", "Box"
            ))
        for rec in self._model.recommendations:
            color = PRIORITY_COLORS[rec.priority].hexval()[2:]
            block: List[Flowable] = [
                self._p(
                    f'<font color="#{color}">[{rec.priority.value} Priority]</font> '
                    f"{escape(rec.title)}",
                    "Heading3",
                ),
                self._p(f"Current score: {rec.score}/100"),
            ]
            block.extend(self._p(f"&bull; {escape(action)}") for action in rec.actions)
            block.append(self._p(f"<i>Potential impact: {escape(rec.impact)}</i>"))
            block.append(Spacer(1, 0.4 * cm))
            story.append(KeepTogether(block))

        story.append(self._p("Advisor Notes", "Heading2"))
        story.extend(self._text(self._model.score.narrative_recommendations))
        return story

    def grade_legend(self) -> List[Flowable]:
        current = self._model.score.risk_grade
        rows = [["Grade", "Score Range", "Rating", "What It Means"]]
        for band in GRADE_BANDS:
            rows.append([
                band.grade.value,
                band.range_text,
                self._p(escape(band.description), "Small"),
                self._p(escape(band.details), "Small"),
            ])

        table = Table(rows, colWidths=[1.6 * cm, 2.6 * cm, 4 * cm, 7.8 * cm], hAlign="LEFT")
        style = list(TABLE_STYLE) + [("VALIGN", (0, 0), (-1, -1), "TOP")]
        for i, band in enumerate(GRADE_BANDS, start=1):
            style.append(("TEXTCOLOR", (0, i), (0, i), GRADE_COLORS[band.grade]))
            if band.grade == current:
                style.append(("BACKGROUND", (0, i), (-1, i), colors.HexColor("#dbeafe")))
        table.setStyle(TableStyle(style))

        return [
            self._heading("Understanding Your Grade"),
            self._p(f"Your grade: <b>{escape(current.value)}</b> (highlighted below)."),
            Spacer(1, 0.4 * cm),
            table,
        ]

    def disclaimer(self) -> List[Flowable]:
        validity = self._settings.report_validity_days
        return [
            self._heading("Important Disclaimer"),
            self._p("<b>This is NOT a traditional FICO or credit bureau score.</b>"),
            self._p(
                "This alternative credit score is calculated from the income and "
                "expense records you provided. It is intended to help lenders and "
                "microfinance institutions assess applicants without a formal "
                "credit history."
            ),
            self._p(
                f"This report is valid for {validity} days from the generation date "
                f"(until {self._model.summary.valid_until:%B %d, %Y}). Scores change "
                f"as new transactions are recorded."
            ),
            self._p(
                "Lenders make their own decisions and may apply additional criteria. "
                "Estimates of loan amounts and approval probability are indicative only.",
            ),
            self._p(
                f"<b>Questions about this report?</b><br/>"
                f"Quote report ID {escape(self._model.summary.report_id)} when "
                f"contacting CreditWise support.",
                "Box",
            ),
        ]

    def sections(self) -> List[Tuple[str, List[Flowable]]]:
        return list(zip(SECTION_TITLES, [
            self.cover(),
            self.executive_summary(),
            self.factor_breakdown(),
            self.recommendations(),
            self.grade_legend(),
            self.disclaimer(),
        ]))


def build_sections(
    model: ReportModel,
    settings: ScoringSettings = scoring_settings,
) -> List[Tuple[str, List[Flowable]]]:
    """Section titles with their flowables, in page order."""
    return ReportRenderer(model, settings).sections()


def build_story(
    model: ReportModel,
    settings: ScoringSettings = scoring_settings,
) -> List[Flowable]:
    """All flowables of the document, each section opening a new page."""
    story: List[Flowable] = []
    for i, (_, flowables) in enumerate(build_sections(model, settings)):
        if i:
            story.append(PageBreak())
        story.extend(flowables)
    return story


def _draw_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(MUTED)
    canvas.drawString(doc.leftMargin, 1.2 * cm, BRAND_FOOTER)
    canvas.drawRightString(
        doc.pagesize[0] - doc.rightMargin, 1.2 * cm, f"Page {doc.page}"
    )
    canvas.restoreState()


def render_report(
    model: ReportModel,
    settings: ScoringSettings = scoring_settings,
) -> bytes:
    """
    Render the report model to PDF bytes.

    The document is built in invariant mode, so the same model always
    produces byte-identical output.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=f"Credit Score Report {model.summary.report_id}",
        author="CreditWise",
        creator="CreditWise",
        invariant=1,
    )
    story = build_story(model, settings)
    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    return buffer.getvalue()
