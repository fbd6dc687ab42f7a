"""GST treatment per invoice regime (Strategy + Factory)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..core.constants import DEFAULT_GST_RATE, DEFAULT_PERSONAL_GST_RATE
from ..core.enums import GstType
from .model import TaxBreakdown


class TaxPolicy(ABC):
    gst_type: GstType

    @abstractmethod
    def compute(self, subtotal: float) -> TaxBreakdown:
        raise NotImplementedError


class IntraStateGstPolicy(TaxPolicy):
    """Rate split evenly into CGST and SGST, both charged."""

    gst_type = GstType.GST

    def __init__(self, rate: float):
        self.rate = float(rate)

    def compute(self, subtotal: float) -> TaxBreakdown:
        half = self.rate / 2
        cgst = subtotal * half / 100
        sgst = subtotal * half / 100
        return TaxBreakdown(
            gst_type=self.gst_type,
            subtotal=subtotal,
            gst_rate=self.rate,
            gst_amount=cgst + sgst,
            cgst_rate=half,
            cgst_amount=cgst,
            sgst_rate=half,
            sgst_amount=sgst,
            total_amount=subtotal + cgst + sgst,
        )


class InterStateGstPolicy(TaxPolicy):
    gst_type = GstType.IGST

    def __init__(self, rate: float):
        self.rate = float(rate)

    def compute(self, subtotal: float) -> TaxBreakdown:
        igst = subtotal * self.rate / 100
        return TaxBreakdown(
            gst_type=self.gst_type,
            subtotal=subtotal,
            gst_rate=self.rate,
            gst_amount=igst,
            igst_rate=self.rate,
            igst_amount=igst,
            total_amount=subtotal + igst,
        )


class ReverseChargePolicy(IntraStateGstPolicy):
    """CGST/SGST are shown on the invoice but paid by the recipient."""

    gst_type = GstType.RCM

    def compute(self, subtotal: float) -> TaxBreakdown:
        shown = super().compute(subtotal)
        return TaxBreakdown(
            gst_type=self.gst_type,
            subtotal=subtotal,
            gst_rate=shown.gst_rate,
            gst_amount=shown.gst_amount,
            cgst_rate=shown.cgst_rate,
            cgst_amount=shown.cgst_amount,
            sgst_rate=shown.sgst_rate,
            sgst_amount=shown.sgst_amount,
            total_amount=subtotal,
        )


class NoGstPolicy(TaxPolicy):
    gst_type = GstType.NGST

    def compute(self, subtotal: float) -> TaxBreakdown:
        return TaxBreakdown(gst_type=self.gst_type, subtotal=subtotal, total_amount=subtotal)


class PersonalBillingPolicy(TaxPolicy):
    """Flat rate on the subtotal, no CGST/SGST/IGST split."""

    gst_type = GstType.PERSONAL

    def __init__(self, rate: float):
        self.rate = float(rate)

    def compute(self, subtotal: float) -> TaxBreakdown:
        amount = subtotal * self.rate / 100
        return TaxBreakdown(
            gst_type=self.gst_type,
            subtotal=subtotal,
            gst_rate=self.rate,
            gst_amount=amount,
            total_amount=subtotal + amount,
        )


@dataclass
class TaxPolicyFactory:
    """Factory Pattern: pick the policy for a regime."""

    gst_rate: float = DEFAULT_GST_RATE
    personal_rate: float = DEFAULT_PERSONAL_GST_RATE

    def for_type(self, gst_type: GstType) -> TaxPolicy:
        if gst_type == GstType.GST:
            return IntraStateGstPolicy(self.gst_rate)
        if gst_type == GstType.IGST:
            return InterStateGstPolicy(self.gst_rate)
        if gst_type == GstType.RCM:
            return ReverseChargePolicy(self.gst_rate)
        if gst_type == GstType.PERSONAL:
            return PersonalBillingPolicy(self.personal_rate)
        return NoGstPolicy()
