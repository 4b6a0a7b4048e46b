from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import EmailStr, Field

from ..common.schemas import ApiModel, ListQuery, PositiveId
from ..common.validators import CODE_PATTERN
from ..core.enums import MobileMoneyProvider, PaymentMethod, WorkerStatus


class WorkerCreate(ApiModel):
    employee_id: str = Field(min_length=1, max_length=50, pattern=CODE_PATTERN)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    national_id: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    status: WorkerStatus = WorkerStatus.ACTIVE
    bank_account: Optional[str] = Field(None, max_length=50)
    bank_name: Optional[str] = Field(None, max_length=100)
    mobile_money_provider: Optional[MobileMoneyProvider] = None
    mobile_money_number: Optional[str] = Field(None, max_length=20)
    airtel_money_number: Optional[str] = Field(None, max_length=20)
    preferred_payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    emergency_contact_name: Optional[str] = Field(None, max_length=100)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    assigned_site_id: PositiveId
    job_type_id: PositiveId


class WorkerUpdate(ApiModel):
    employee_id: Optional[str] = Field(None, min_length=1, max_length=50, pattern=CODE_PATTERN)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    national_id: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    status: Optional[WorkerStatus] = None
    bank_account: Optional[str] = Field(None, max_length=50)
    bank_name: Optional[str] = Field(None, max_length=100)
    mobile_money_provider: Optional[MobileMoneyProvider] = None
    mobile_money_number: Optional[str] = Field(None, max_length=20)
    airtel_money_number: Optional[str] = Field(None, max_length=20)
    preferred_payment_method: Optional[PaymentMethod] = None
    emergency_contact_name: Optional[str] = Field(None, max_length=100)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    assigned_site_id: Optional[PositiveId] = None
    job_type_id: Optional[PositiveId] = None


class WorkerListQuery(ListQuery):
    status: Optional[WorkerStatus] = None
    site_id: Optional[PositiveId] = None
    job_type_id: Optional[PositiveId] = None
