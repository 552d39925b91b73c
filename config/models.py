from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any

class DiffConfig(BaseModel):
    max_length: int = Field(8000, ge=0, description="smart diff 的字节预算")

class HistoryConfig(BaseModel):
    limit: int = Field(100, gt=0, description="分析的提交数量")
    top_patterns: int = Field(3, ge=0, description="展示的常用提交模式数量")

class CollectorConfig(BaseModel):
    type: str
    options: Dict[str, Any] = Field(default_factory=dict)

class FormatterConfig(BaseModel):
    template_dir: Optional[str] = None
    report_template: str = "stats_report.j2"
    prompt_template: str = "commit_prompt.j2"

class OutputConfig(BaseModel):
    language: str = "en"
    max_subject_len: int = 72
    detailed: bool = Field(False, description="生成带正文的多行提交信息")

class TicketConfig(BaseModel):
    pattern: Optional[str] = Field(None, description="从分支名提取工单号的自定义正则")
    prefix: Optional[str] = Field(None, description="纯数字工单号的前缀")

class LogConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = "gitai.log"


class Config(BaseModel):
    diff: DiffConfig = Field(default_factory=DiffConfig, description="diff 分析相关配置")
    history: HistoryConfig = Field(default_factory=HistoryConfig, description="提交历史分析相关配置")
    collectors: List[CollectorConfig] = Field(default_factory=list, description="收集器列表配置")
    formatter: FormatterConfig = Field(default_factory=FormatterConfig, description="模板相关配置")
    output: OutputConfig = Field(default_factory=OutputConfig, description="输出相关配置")
    ticket: TicketConfig = Field(default_factory=TicketConfig, description="工单号相关配置")
    log: LogConfig = Field(default_factory=LogConfig, description="日志相关配置")
