from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, Field, model_validator

from ..common.schemas import ApiModel, ListQuery, LocalDateTime, PositiveId
from ..core.enums import PaymentMethod, PaymentStatus, PayPeriodType


class _PayPeriod(ApiModel):
    pay_period_start: LocalDateTime
    pay_period_end: LocalDateTime
    pay_period_type: PayPeriodType
    calculated_by: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def _period_order(self):
        if self.pay_period_end < self.pay_period_start:
            raise ValueError("payPeriodEnd must not be before payPeriodStart")
        return self


class PayrollCalculateRequest(_PayPeriod):
    site_id: Optional[PositiveId] = None


class PayrollCreate(_PayPeriod):
    worker_id: PositiveId
    site_id: PositiveId


class PayrollProcessRequest(ApiModel):
    payroll_record_ids: List[PositiveId] = Field(min_length=1)
    payment_method: PaymentMethod
    payment_reference: Optional[str] = Field(None, max_length=100)
    processed_by: Optional[str] = Field(None, max_length=100)


class PayrollUpdate(ApiModel):
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[LocalDateTime] = None
    payment_reference: Optional[str] = Field(None, max_length=100)
    approved_by: Optional[str] = Field(None, max_length=100)
    approved_at: Optional[LocalDateTime] = None


class PayrollListQuery(ListQuery):
    site_id: Optional[PositiveId] = None
    worker_id: Optional[PositiveId] = None
    # The payroll screens send `status`.
    payment_status: Optional[PaymentStatus] = Field(
        None, validation_alias=AliasChoices("paymentStatus", "status", "payment_status")
    )
    pay_period_type: Optional[PayPeriodType] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
