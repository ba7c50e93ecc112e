"""
Batch operations.

A batch bundles many API calls into one asynchronous job. Each operation
carries its own method, path, query parameters and pre-serialized JSON body.
"""

from dataclasses import dataclass, field

from ..core.context import RequestContext
from ..core.params import BasicQueryParams, ListQueryParams
from ..core.schema import ListEnvelope, Resource, api_field, require_id, resource_path

BATCHES_PATH = "/batches"
SINGLE_BATCH_PATH = BATCHES_PATH + "/{batch_id}"


@dataclass
class BatchOperation:
    method: str = ""
    path: str = ""
    params: dict[str, list[str]] | None = None
    body: str = ""
    operation_id: str | None = None


@dataclass
class BatchOperationCreationRequest:
    operations: list[BatchOperation] = field(default_factory=list)


@dataclass
class BatchOperationResponse(Resource):
    id: str = ""
    status: str = ""
    total_operations: int = 0
    finished_operations: int = 0
    errored_operations: int = 0
    submitted_at: str = ""
    completed_at: str = ""
    response_body_url: str = ""

    @property
    def finished(self) -> bool:
        return self.status == "finished"

    def refresh(self, context: RequestContext | None = None) -> "BatchOperationResponse":
        """Fetch the current state of this batch."""
        require_id("batch", id=self.id)
        return self.api.get_batch_operation(self.id, context=context)


@dataclass
class ListOfBatchOperations(ListEnvelope):
    batch_operations: list[BatchOperationResponse] = api_field(name="batches", default_factory=list)

    items_field = "batch_operations"


class BatchesMixin:
    """Batch operation endpoints."""

    def get_batch_operations(
        self,
        params: ListQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfBatchOperations:
        return self.request(
            "GET", BATCHES_PATH,
            params=params, response_type=ListOfBatchOperations, context=context,
        )

    def get_batch_operation(
        self,
        batch_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> BatchOperationResponse:
        require_id("batch", batch_id=batch_id)
        path = resource_path(SINGLE_BATCH_PATH, batch_id=batch_id)
        return self.request(
            "GET", path,
            params=params, response_type=BatchOperationResponse, context=context,
        )

    def create_batch_operation(
        self,
        body: BatchOperationCreationRequest,
        context: RequestContext | None = None,
    ) -> BatchOperationResponse:
        return self.request(
            "POST", BATCHES_PATH,
            body=body, response_type=BatchOperationResponse, context=context,
        )
