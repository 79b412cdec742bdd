"""订单履约服务"""

from app.services.fulfillment.workflow import (
    FulfillmentWorkflow,
    InlineFulfillmentWorkflow,
    ProcedureFulfillmentWorkflow,
)

__all__ = [
    "FulfillmentWorkflow",
    "InlineFulfillmentWorkflow",
    "ProcedureFulfillmentWorkflow",
]
