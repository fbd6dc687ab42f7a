from __future__ import annotations

import pytest

from guardforce.core.enums import GstType
from guardforce.invoices.tax import (
    InterStateGstPolicy,
    IntraStateGstPolicy,
    NoGstPolicy,
    PersonalBillingPolicy,
    ReverseChargePolicy,
    TaxPolicyFactory,
)


def test_gst_splits_rate_into_cgst_and_sgst():
    tax = IntraStateGstPolicy(18).compute(34400)

    assert tax.cgst_rate == 9 and tax.sgst_rate == 9
    assert tax.cgst_amount == pytest.approx(3096.00)
    assert tax.sgst_amount == pytest.approx(3096.00)
    assert tax.igst_amount == 0
    assert tax.gst_amount == pytest.approx(6192.00)
    assert tax.total_amount == pytest.approx(40592.00)


def test_igst_charges_full_rate_as_igst():
    tax = InterStateGstPolicy(18).compute(10000)

    assert tax.igst_rate == 18
    assert tax.igst_amount == pytest.approx(1800)
    assert tax.cgst_amount == 0 and tax.sgst_amount == 0
    assert tax.total_amount == pytest.approx(11800)


def test_rcm_shows_split_but_charges_subtotal():
    tax = ReverseChargePolicy(18).compute(46500)

    assert tax.cgst_amount == pytest.approx(4185)
    assert tax.sgst_amount == pytest.approx(4185)
    assert tax.total_amount == 46500


def test_ngst_charges_subtotal_at_zero_rate():
    tax = NoGstPolicy().compute(5000)

    assert tax.gst_rate == 0
    assert tax.gst_amount == 0
    assert tax.total_amount == 5000


def test_personal_uses_flat_rate_without_split():
    assert PersonalBillingPolicy(0).compute(5000).total_amount == 5000

    tax = PersonalBillingPolicy(5).compute(5000)
    assert tax.gst_amount == pytest.approx(250)
    assert tax.cgst_amount == 0 and tax.igst_amount == 0
    assert tax.total_amount == pytest.approx(5250)


@pytest.mark.parametrize(
    "gst_type, policy_cls",
    [
        (GstType.GST, IntraStateGstPolicy),
        (GstType.IGST, InterStateGstPolicy),
        (GstType.RCM, ReverseChargePolicy),
        (GstType.NGST, NoGstPolicy),
        (GstType.PERSONAL, PersonalBillingPolicy),
    ],
)
def test_factory_selects_policy(gst_type, policy_cls):
    policy = TaxPolicyFactory().for_type(gst_type)

    assert type(policy) is policy_cls
    assert policy.compute(100).gst_type == gst_type


def test_factory_uses_configured_rate():
    tax = TaxPolicyFactory(gst_rate=12).for_type(GstType.GST).compute(1000)

    assert tax.cgst_rate == 6
    assert tax.total_amount == pytest.approx(1120)
