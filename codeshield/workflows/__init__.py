"""Form workflows behind the Code Shield page."""

from codeshield.workflows.best_practices import BestPracticesWorkflow
from codeshield.workflows.page import CodeShieldPage
from codeshield.workflows.remediation import RemediationState, RemediationWorkflow
from codeshield.workflows.scan import ScanWorkflow

__all__ = [
    "BestPracticesWorkflow",
    "CodeShieldPage",
    "RemediationState",
    "RemediationWorkflow",
    "ScanWorkflow",
]
