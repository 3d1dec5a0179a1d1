"""
Domain Constants

Centrally manages constants shared across the evaluation viewer.
"""

from typing import Literal, get_args

# Metric fields of an evaluated record, in radar axis order
METRIC_KEYS = [
    "relevance_score",
    "factual_accuracy",
    "coherence_score",
    "response_quality",
]

METRIC_LABELS = {
    "relevance_score": "Relevance Score",
    "factual_accuracy": "Factual Accuracy",
    "coherence_score": "Coherence Score",
    "response_quality": "Response Quality",
}

# Valid values of a record's status field
RecordStatus = Literal["success", "timeout"]
RECORD_STATUSES = list(get_args(RecordStatus))

# Preferred model ordering on the radar chart
DEFAULT_MODELS = [
    "gpt-4",
    "gpt-3.5-turbo",
    "claude-3",
]

# Line / fill colors per model (border, background)
MODEL_COLORS = {
    "gpt-4": ("rgb(34, 197, 94)", "rgba(34, 197, 94, 0.2)"),
    "gpt-3.5-turbo": ("rgb(59, 130, 246)", "rgba(59, 130, 246, 0.2)"),
    "claude-3": ("rgb(168, 85, 247)", "rgba(168, 85, 247, 0.2)"),
}

# Used for models outside MODEL_COLORS
FALLBACK_COLORS = [
    ("rgb(234, 67, 53)", "rgba(234, 67, 53, 0.2)"),
    ("rgb(232, 113, 10)", "rgba(232, 113, 10, 0.2)"),
    ("rgb(0, 137, 123)", "rgba(0, 137, 123, 0.2)"),
    ("rgb(84, 110, 122)", "rgba(84, 110, 122, 0.2)"),
]

# Display scale used when no record carries evaluation metrics
FALLBACK_SCALE_MIN = 0.0
FALLBACK_SCALE_MAX = 10.0

# Table columns: (record field, header)
TABLE_COLUMNS = [
    ("id", "ID"),
    ("timestamp", "Timestamp"),
    ("model", "Model"),
    ("prompt_tokens", "Prompt Tokens"),
    ("completion_tokens", "Completion Tokens"),
    ("total_tokens", "Total Tokens"),
    ("response_time_ms", "Response Time (ms)"),
    ("status", "Status"),
    ("cost_usd", "Cost (USD)"),
    ("temperature", "Temperature"),
    ("max_tokens", "Max Tokens"),
]
