from .attachment import (
    AttachmentEstimate,
    AttachmentEstimator,
    NewmanEstimator,
    attachment_counts,
    attachment_kernel,
    estimate_alpha,
)

__all__ = [
    "AttachmentEstimate",
    "AttachmentEstimator",
    "NewmanEstimator",
    "attachment_counts",
    "attachment_kernel",
    "estimate_alpha",
]
