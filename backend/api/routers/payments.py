"""Payment endpoints: Stripe payment intents and the membership ledger."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import (
    Capability,
    Caller,
    get_event_bus,
    get_payment_gateway,
    get_repositories,
    requires,
)
from api.schemas import PaymentIntentRequest, RecordPaymentRequest
from application.membership.commands import (
    CreatePaymentIntentCommand,
    CreatePaymentIntentCommandHandler,
    RecordPaymentCommand,
    RecordPaymentCommandHandler,
)
from application.membership.queries import ListPaymentsQuery
from domain.membership.core.ports.payment_gateway import IPaymentGateway
from domain.shared.ports.event_bus import IEventBus
from infrastructure.persistence.factory import Repositories

router = APIRouter(tags=["payments"])


@router.post("/create-payment-intent")
async def create_payment_intent(
    body: PaymentIntentRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    secret = await CreatePaymentIntentCommandHandler(gateway).handle(
        CreatePaymentIntentCommand(amount=body.amount)
    )
    return {"clientSecret": secret}


@router.post("/payments")
async def record_payment(
    body: RecordPaymentRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
    event_bus: IEventBus = Depends(get_event_bus),
):
    """Append a completed payment and grant the package badge."""
    handler = RecordPaymentCommandHandler(
        repositories.payments, repositories.memberships, repositories.users, event_bus
    )
    payment = await handler.handle(
        RecordPaymentCommand(
            verified_email=caller.email,
            amount=body.amount,
            transaction_id=body.transaction_id,
            membership_id=body.membership_id,
            payment_method=body.payment_method,
            email=body.email,
        )
    )
    return JSONResponse(
        status_code=201,
        content={"insertedId": payment.id, "payment": payment.to_dict()},
    )


@router.get("/payments/me")
async def list_my_payments(
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    payments = await ListPaymentsQuery(repositories.payments).for_user(caller.email)
    return [payment.to_dict() for payment in payments]


@router.get("/payments")
async def list_payments(
    page: int = Query(1),
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    result = await ListPaymentsQuery(repositories.payments).all(page)
    return result.to_dict()
