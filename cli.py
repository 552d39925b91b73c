import asyncio
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table
from rich.text import Text

# 导入 collectors 以注册它们
import core.collectors  # noqa: F401

from config.logic import load_and_merge_configs
from config.models import Config
from core.contracts.models import AnalysisReport, DiffAnalysisResult
from core.pipeline import InsightPipeline
from utils.errors import GitAIException
from utils.git import has_staged_changes, is_git_repository
from utils.logger import logger, setup_logger


def load_config(ctx: click.Context, config_path: Optional[str]) -> Config:
    """加载配置并按配置重新设置日志"""
    config = load_and_merge_configs(custom_config_path=config_path)
    level = "DEBUG" if ctx.obj.get("verbose") else config.log.level
    setup_logger(log_level=level, log_file=config.log.file)
    return config


def run_pipeline(pipeline: InsightPipeline, *collectors: str) -> AnalysisReport:
    """
    使用指定的收集器运行分析流水线
    """
    return asyncio.run(pipeline.run(only=collectors))


def show_diff_summary(console: Console, diff: DiffAnalysisResult) -> None:
    table = Table(title="暂存区变更", title_style="bold cyan")
    table.add_column("文件")
    table.add_column("状态")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    table.add_column("类型")
    table.add_column("关键变更")
    for summary in diff.file_summaries:
        kind = summary.file_type
        if summary.is_test_file:
            kind += " (test)"
        elif summary.is_config_file:
            kind += " (config)"
        table.add_row(
            escape(summary.path),
            summary.status,
            str(summary.additions),
            str(summary.deletions),
            kind,
            escape(", ".join(summary.key_changes)),
        )
    console.print(table)
    console.print(
        f"共 [bold]{diff.modified_files}[/bold] 个文件, "
        f"[green]+{diff.total_additions}[/green]/[red]-{diff.total_deletions}[/red], "
        f"复杂度: [bold]{diff.complexity}[/bold]"
        + (" [yellow](大型变更)[/yellow]" if diff.is_large_change else "")
    )


@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="启用详细日志记录以进行调试",
)
@click.pass_context
def cli(ctx, verbose: bool):
    """
    Git 暂存区变更与提交历史分析工具。
    """
    setup_logger(log_level="DEBUG" if verbose else "INFO")
    ctx.obj = {'verbose': verbose}


@cli.command("analyze")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="自定义配置文件的路径",
)
@click.option("--max-length", type=click.IntRange(min=0), help="覆盖 smart diff 的字节预算",)
@click.option("--json", "as_json", is_flag=True, help="以 JSON 格式输出分析结果",)
@click.option("--prompt", "show_prompt", is_flag=True, help="输出生成提交信息用的提示词",)
@click.option("--type", "commit_type", type=str, help="提示词中使用的提交类型 (例如 'feat')",)
@click.option("--scope", type=str, help="提示词中使用的 scope",)
@click.pass_context
def analyze(ctx, config_path: str, max_length: int, as_json: bool, show_prompt: bool, commit_type: str, scope: str):
    """
    分析暂存区的 diff。
    """
    console = Console()
    verbose = ctx.obj.get('verbose', False)
    try:
        config = load_config(ctx, config_path)
        if max_length is not None:
            config.diff.max_length = max_length

        if not is_git_repository():
            raise GitAIException("不是一个 Git 仓库。请在 Git 仓库中运行此命令。")
        if not has_staged_changes():
            raise GitAIException("没有发现暂存区的变更。请先执行 git add 命令。")

        pipeline = InsightPipeline(config)
        collectors = ("diff", "branch", "history") if show_prompt else ("diff", "branch")
        with console.status("[bold green]正在分析暂存区变更...[/bold green]"):
            report = run_pipeline(pipeline, *collectors)
        if report.diff is None:
            raise GitAIException("配置中没有启用 diff 收集器。请在 collectors 列表中加入 `type: diff`。")

        if as_json:
            click.echo(report.diff.model_dump_json(indent=2))
        elif show_prompt:
            prompt = pipeline.render_prompt(report, commit_type=commit_type, scope=scope)
            click.echo(prompt)
        else:
            show_diff_summary(console, report.diff)
            if report.ticket:
                console.print(f"工单号: [bold]{escape(report.ticket)}[/bold]")

    except GitAIException as e:
        logger.opt(exception=verbose).error(f"发生已知错误: {e}")
        console.print(f"[bold red]错误:[/bold red] {e}")
        ctx.exit(1)
    except Exception as e:
        logger.exception(f"发生未知错误: {e}")
        console.print(f"[bold red]发生未知错误:[/bold red] {e}")
        ctx.exit(1)


@cli.command("stats")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="自定义配置文件的路径",
)
@click.option("-n", "--limit", type=click.IntRange(min=1), help="要分析的提交数量",)
@click.option(
    "-e", "--export",
    "export_path",
    type=click.Path(dir_okay=False, writable=True),
    help="将统计结果导出为 JSON 文件",
)
@click.pass_context
def stats(ctx, config_path: str, limit: int, export_path: str):
    """
    显示提交历史的统计信息与常用模式。
    """
    console = Console()
    verbose = ctx.obj.get('verbose', False)
    try:
        config = load_config(ctx, config_path)
        if limit is not None:
            config.history.limit = limit

        if not is_git_repository():
            raise GitAIException("不是一个 Git 仓库。")

        pipeline = InsightPipeline(config)
        console.print(f"🔍 正在分析最近 {config.history.limit} 个提交...\n")
        report = run_pipeline(pipeline, "history")
        if report.history is None:
            raise GitAIException("配置中没有启用 history 收集器。请在 collectors 列表中加入 `type: history`。")

        if report.history.total_commits == 0:
            console.print("[yellow]仓库中没有找到提交。[/yellow]")
            return

        text = pipeline.render_stats_report(report)
        console.print(Panel(Text(text), title="[bold cyan]提交历史统计[/bold cyan]", border_style="cyan", expand=False))

        if export_path:
            payload = report.model_dump_json(include={"history", "patterns"}, indent=2)
            Path(export_path).write_text(payload, encoding="utf-8")
            console.print(f"[bold green]✅ 统计结果已导出到 {export_path}[/bold green]")

    except GitAIException as e:
        logger.opt(exception=verbose).error(f"发生已知错误: {e}")
        console.print(f"[bold red]错误:[/bold red] {e}")
        ctx.exit(1)
    except Exception as e:
        logger.exception(f"发生未知错误: {e}")
        console.print(f"[bold red]发生未知错误:[/bold red] {e}")
        ctx.exit(1)


if __name__ == "__main__":
    cli()
