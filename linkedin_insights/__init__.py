"""
Batch pipeline turning a LinkedIn posts sheet into dashboard-ready JSON.
"""
from linkedin_insights.pipeline import PipelineResult, process, run_pipeline

__all__ = ["PipelineResult", "process", "run_pipeline"]
