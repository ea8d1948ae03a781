from .buffer import FinalSegmentBuffer
from .promoter import InactivityPromoter
from .reconciler import TranscriptReconciler

__all__ = ["FinalSegmentBuffer", "InactivityPromoter", "TranscriptReconciler"]
