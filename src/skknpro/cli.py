"""SKKN Pro CLI - typer application entry point."""

from __future__ import annotations

import asyncio
import atexit
import base64
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from skknpro.observability import close_file_logging, configure_logging, get_logger

# Load environment variables from .env file
load_dotenv()

if TYPE_CHECKING:
    from skknpro.models import AppraisalResult, Attachment, TitleAnalysis
    from skknpro.pipeline import Phase, PipelineOrchestrator, WorkflowView

app = typer.Typer(
    name="skknpro",
    help="SKKN Pro: soạn, chấm và thẩm định sáng kiến kinh nghiệm bằng AI.",
    no_args_is_help=True,
)
console = Console()

# Global state for logging flags (set by callback, used by commands)
_verbose: int = 0
_log_enabled: bool = False
_project_path: Path = Path()

ApiKeyOption = Annotated[
    str | None,
    typer.Option(
        "--api-key",
        "-k",
        help="Gemini API key (default: SKKN_API_KEY, then GOOGLE_API_KEY).",
    ),
]
ModelOption = Annotated[
    str | None,
    typer.Option(
        "--model",
        "-m",
        help="fast, smart, expert or an explicit model id (default: SKKN_MODEL).",
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result to this file."),
]


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log: Annotated[
        bool,
        typer.Option(
            "--log",
            help="Enable file logging to {project}/logs/ (debug.jsonl, llm_calls.jsonl).",
        ),
    ] = False,
    project: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help="Directory holding skknpro.yaml and receiving logs/.",
            envvar="SKKN_PROJECT_DIR",
        ),
    ] = Path(),
) -> None:
    """SKKN Pro: soạn, chấm và thẩm định sáng kiến kinh nghiệm bằng AI."""
    global _verbose, _log_enabled, _project_path
    _verbose = verbose
    _log_enabled = log
    _project_path = project

    if log:
        configure_logging(verbosity=verbose, log_to_file=True, project_path=project)
        atexit.register(close_file_logging)
    else:
        configure_logging(verbosity=verbose)


def _get_orchestrator(api_key: str | None, model: str | None) -> PipelineOrchestrator:
    """Build an orchestrator from flags, environment and config files.

    Raises:
        typer.Exit: If skknpro.yaml cannot be loaded.
    """
    from skknpro.observability import LLMLogger
    from skknpro.pipeline import (
        ConfigError,
        PipelineOrchestrator,
        load_pipeline_config,
        load_user_config,
        resolve_request_settings,
    )

    try:
        config = load_pipeline_config(_project_path, defaults=load_user_config())
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    settings = resolve_request_settings(config, credential=api_key, model_selector=model)
    llm_logger = LLMLogger(_project_path, enabled=_log_enabled or config.log_llm_calls)
    return PipelineOrchestrator(settings, config=config, llm_logger=llm_logger)


def _on_progress(phase: Phase, label: str) -> None:
    if label:
        console.print(f"[dim]{label}[/dim]")


def _run_workflow(run: Callable[[], Awaitable[WorkflowView]]) -> WorkflowView:
    """Run a workflow coroutine, turning start-up refusals into exit 1."""
    from skknpro.pipeline import PipelineError

    log = get_logger(__name__)
    try:
        return asyncio.run(run())
    except PipelineError as e:
        log.warning("workflow_refused", workflow=str(e.workflow), error=e.message)
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


def _finish(view: WorkflowView, output: Path | None, text: str) -> None:
    """Print or save ``text``; exit 1 if the workflow ended in Error."""
    if view.failed:
        console.print()
        console.print(f"[red]✗[/red] {view.error_message}")
        if view.accumulated_text:
            console.print(f"[dim]Đã tạo {len(view.accumulated_text):,} ký tự trước khi lỗi.[/dim]")
            if output is not None:
                output.write_text(view.accumulated_text, encoding="utf-8")
                console.print(f"  Bản dở dang: [cyan]{output}[/cyan]")
        raise typer.Exit(1)

    if view.used_demo:
        console.print(
            "[yellow]Lưu ý:[/yellow] kết quả là nội dung mẫu (chế độ demo), không do AI tạo."
        )

    if output is not None:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]✓[/green] Đã lưu: [cyan]{output}[/cyan]")
    elif text:
        console.print()
        console.print(Markdown(text))

    for record in view.stages:
        source = record.model or "demo"
        console.print(
            f"  [dim]{record.stage}: {source} "
            f"({len(record.attempted_models)} lượt gọi, {record.duration_seconds:.1f}s)[/dim]"
        )


def _load_attachment(path: Path) -> Attachment:
    """Read an attachment: PDFs as base64, anything else as extracted text.

    Raises:
        typer.Exit: If the file does not exist or is not UTF-8 text.
    """
    from skknpro.models import Attachment

    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    if path.suffix.lower() == ".pdf":
        payload = base64.b64encode(path.read_bytes()).decode("ascii")
        return Attachment(name=path.name, kind="pdf", content=payload)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        console.print(
            f"[red]Error:[/red] {path.name} is not UTF-8 text. "
            "Pass a PDF or the extracted text of the document."
        )
        raise typer.Exit(1) from None
    return Attachment(name=path.name, kind="txt", content=content)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from skknpro import __version__

    console.print(f"SKKN Pro v{__version__}")


@app.command()
def models() -> None:
    """List model selectors and their attempt plans."""
    from skknpro.providers import SELECTABLE_MODELS, resolve_attempt_plan
    from skknpro.providers.model_plans import CUSTOM

    table = Table(title="Model")
    table.add_column("Selector", style="cyan")
    table.add_column("Tên")
    table.add_column("Thứ tự thử", style="dim")
    for selector, label in SELECTABLE_MODELS:
        if selector == CUSTOM:
            plan = "--model <id>, rồi danh sách fast"
        else:
            plan = ", ".join(resolve_attempt_plan(selector))
        table.add_row(selector, label, plan)
    console.print(table)


@app.command("test-connection")
def test_connection(api_key: ApiKeyOption = None, model: ModelOption = None) -> None:
    """Send one greeting to the first model of the plan."""
    from skknpro.providers import ProviderError

    orchestrator = _get_orchestrator(api_key, model)
    try:
        reply = asyncio.run(orchestrator.test_connection())
    except ProviderError as e:
        console.print(f"[red]✗[/red] Kết nối thất bại: {e}")
        raise typer.Exit(1) from e

    console.print(f"[green]✓[/green] Kết nối thành công ({orchestrator.plan[0]})")
    console.print(Panel(reply, expand=False))


@app.command()
def generate(
    title: Annotated[str, typer.Argument(help="Tên đề tài.")],
    subject: Annotated[str, typer.Option("--subject", "-s", help="Môn học.")] = "",
    book_set: Annotated[str, typer.Option("--book-set", help="Bộ sách giáo khoa.")] = "",
    grade: Annotated[str, typer.Option("--grade", "-g", help="Khối lớp.")] = "",
    situation: Annotated[str, typer.Option("--situation", help="Thực trạng.")] = "",
    solution: Annotated[str, typer.Option("--solution", help="Giải pháp dự kiến.")] = "",
    lessons: Annotated[str, typer.Option("--lessons", help="Bài học minh họa cụ thể.")] = "",
    attach: Annotated[
        list[Path] | None,
        typer.Option("--attach", "-a", help="Tài liệu tham khảo (.pdf hoặc văn bản)."),
    ] = None,
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Draft a report in three stages: outline, sections I-II, the rest."""
    from skknpro.models import TopicForm

    form = TopicForm(
        title=title,
        subject=subject,
        book_set=book_set,
        grade=grade,
        situation=situation,
        solution=solution,
        specific_lessons=lessons,
        attachments=[_load_attachment(p) for p in attach or []],
    )
    orchestrator = _get_orchestrator(api_key, model)
    view = _run_workflow(lambda: orchestrator.generate_report(form, _on_progress))
    _finish(view, output, view.accumulated_text)


def _review_command(
    kind: str,
    file: Path | None,
    text: str,
    output: Path | None,
    api_key: str | None,
    model: str | None,
) -> None:
    from skknpro.models import Submission

    submission = Submission(
        content=text, attachment=_load_attachment(file) if file is not None else None
    )
    orchestrator = _get_orchestrator(api_key, model)
    if kind == "evaluate":
        view = _run_workflow(lambda: orchestrator.evaluate(submission, _on_progress))
    else:
        view = _run_workflow(lambda: orchestrator.check_plagiarism(submission, _on_progress))
    _finish(view, output, view.accumulated_text)


@app.command()
def evaluate(
    file: Annotated[Path | None, typer.Argument(help="Bản SKKN (.pdf hoặc văn bản).")] = None,
    text: Annotated[str, typer.Option("--text", "-t", help="Nội dung SKKN dán trực tiếp.")] = "",
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Score a finished report against the rubric."""
    _review_command("evaluate", file, text, output, api_key, model)


@app.command()
def plagiarism(
    file: Annotated[Path | None, typer.Argument(help="Bản SKKN (.pdf hoặc văn bản).")] = None,
    text: Annotated[str, typer.Option("--text", "-t", help="Nội dung SKKN dán trực tiếp.")] = "",
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Check a finished report for copied passages."""
    _review_command("plagiarism", file, text, output, api_key, model)


def _print_title_analysis(result: TitleAnalysis) -> None:
    console.print(
        Panel(
            f"[bold]{result.score}/100[/bold] ({result.grade})\n{result.conclusion}",
            title="Phân tích tên đề tài",
            expand=False,
        )
    )
    criteria = Table(title="Tiêu chí")
    criteria.add_column("Tiêu chí")
    criteria.add_column("Điểm", justify="right")
    criteria.add_column("Nhận xét")
    for name, item in (
        ("Tính cụ thể", result.criteria.specificity),
        ("Tính mới", result.criteria.novelty),
        ("Tính khả thi", result.criteria.feasibility),
        ("Tính rõ ràng", result.criteria.clarity),
    ):
        criteria.add_row(name, f"{item.score}/{item.max}", item.comment)
    console.print(criteria)

    alternatives = Table(title="Đề xuất tên thay thế")
    alternatives.add_column("Tên đề tài")
    alternatives.add_column("Điểm", justify="right")
    for alternative in result.alternatives:
        alternatives.add_row(alternative.title, str(alternative.score))
    console.print(alternatives)


def _print_appraisal(result: AppraisalResult) -> None:
    table = Table(title=f"Thẩm định: {result.total_score}/100")
    table.add_column("Tiêu chí")
    table.add_column("Điểm", justify="right")
    table.add_column("Nhận xét")
    for criterion in result.criteria:
        table.add_row(criterion.name, f"{criterion.score:g}/{criterion.max}", criterion.comment)
    console.print(table)
    console.print(f"[bold]Trùng lặp:[/bold] {result.warnings.duplicate.text}")
    console.print(f"[bold]Đạo văn:[/bold] {result.warnings.plagiarism.text}")
    console.print("[bold]Lộ trình nâng cấp:[/bold]")
    plan = result.upgrade_plan
    for horizon in (plan.short, plan.medium, plan.long):
        for step in horizon:
            console.print(f"  • {step}")


def _finish_structured(view: WorkflowView, output: Path | None, as_json: bool) -> None:
    from skknpro.models import AppraisalResult, TitleAnalysis

    result = view.result
    if view.failed or not isinstance(result, (TitleAnalysis, AppraisalResult)):
        _finish(view, output, "")
        return

    payload = json.dumps(result.to_json_dict(), ensure_ascii=False, indent=2)
    if output is not None:
        _finish(view, output, payload)
        return

    _finish(view, None, "")
    if as_json:
        console.print_json(payload)
    elif isinstance(result, TitleAnalysis):
        _print_title_analysis(result)
    else:
        _print_appraisal(result)


@app.command("analyze-title")
def analyze_title(
    title: Annotated[str, typer.Argument(help="Tên đề tài cần phân tích.")],
    subject: Annotated[str, typer.Option("--subject", "-s", help="Môn học.")] = "",
    grade: Annotated[str, typer.Option("--grade", "-g", help="Cấp học.")] = "",
    award: Annotated[str, typer.Option("--award", help="Mục tiêu giải.")] = "",
    as_json: Annotated[bool, typer.Option("--json", help="Print raw JSON.")] = False,
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Score a proposed title and suggest five alternatives."""
    from skknpro.models import TitleTopic

    topic = TitleTopic(title=title, subject=subject, grade_level=grade, award_goal=award)
    orchestrator = _get_orchestrator(api_key, model)
    view = _run_workflow(lambda: orchestrator.analyze_title(topic, _on_progress))
    _finish_structured(view, output, as_json)


@app.command()
def appraise(
    file: Annotated[Path, typer.Argument(help="Bản SKKN dạng văn bản.")],
    title: Annotated[str, typer.Option("--title", help="Tên đề tài.")] = "",
    subject: Annotated[str, typer.Option("--subject", "-s", help="Môn học.")] = "",
    grade: Annotated[str, typer.Option("--grade", "-g", help="Cấp học.")] = "",
    award: Annotated[str, typer.Option("--award", help="Mục tiêu giải.")] = "Cấp Trường",
    pain_point: Annotated[str, typer.Option("--pain-point", help="Vấn đề cốt lõi.")] = "",
    as_json: Annotated[bool, typer.Option("--json", help="Print raw JSON.")] = False,
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Appraise a report against the requirements of its award tier."""
    from skknpro.models import AppraisalInput

    attachment = _load_attachment(file)
    if attachment.is_binary:
        console.print("[red]Error:[/red] Appraisal needs extracted text, not a PDF.")
        raise typer.Exit(1)

    task = AppraisalInput(
        title=title or file.stem,
        subject=subject,
        grade_level=grade,
        award_goal=award,
        pain_point=pain_point,
        content=attachment.content,
    )
    orchestrator = _get_orchestrator(api_key, model)
    view = _run_workflow(lambda: orchestrator.appraise(task, _on_progress))
    _finish_structured(view, output, as_json)


@app.command()
def write(
    title: Annotated[str, typer.Argument(help="Tên đề tài.")],
    author: Annotated[str, typer.Option("--author", help="Họ và tên tác giả.")] = "",
    author_title: Annotated[str, typer.Option("--author-title", help="Chức vụ.")] = "",
    school: Annotated[str, typer.Option("--school", help="Đơn vị công tác.")] = "",
    address: Annotated[str, typer.Option("--address", help="Địa chỉ đơn vị.")] = "",
    subject: Annotated[str, typer.Option("--subject", "-s", help="Môn học.")] = "",
    grade: Annotated[str, typer.Option("--grade", "-g", help="Cấp học.")] = "",
    award: Annotated[str, typer.Option("--award", help="Mục tiêu giải.")] = "Cấp Trường",
    problem: Annotated[str, typer.Option("--problem", help="Thực trạng.")] = "",
    solution: Annotated[str, typer.Option("--solution", help="Giải pháp.")] = "",
    outcome: Annotated[str, typer.Option("--outcome", help="Kết quả mong đợi.")] = "",
    sample_size: Annotated[str, typer.Option("--sample-size", help="Cỡ mẫu.")] = "60",
    duration: Annotated[
        str, typer.Option("--duration", help="Thời gian thực nghiệm.")
    ] = "1 học kỳ (16 tuần)",
    tools: Annotated[str, typer.Option("--tools", help="Công cụ sử dụng.")] = "",
    output: OutputOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
) -> None:
    """Write a complete report in a single call."""
    from skknpro.models import WriterInput

    task = WriterInput(
        author_name=author,
        author_title=author_title,
        school_name=school,
        school_address=address,
        title=title,
        subject=subject,
        grade_level=grade,
        award_goal=award,
        current_problem=problem,
        proposed_solution=solution,
        expected_outcome=outcome,
        sample_size=sample_size,
        duration=duration,
        tools_used=tools,
    )
    orchestrator = _get_orchestrator(api_key, model)
    view = _run_workflow(lambda: orchestrator.write_report(task, _on_progress))
    _finish(view, output, view.accumulated_text)
