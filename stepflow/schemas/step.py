from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StrictFloat,
    StrictInt,
    Tag,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from stepflow.schemas.base import CamelModel


class StepType(str, Enum):
    START = "start"
    END = "end"
    API_CALL = "api_call"
    EMAIL = "email"
    TEXT_BOX = "text_box"
    CONDITION = "condition"


class BaseStepData(BaseModel):
    # Unknown keys are kept so older and newer editors can share workflows
    model_config = ConfigDict(extra="allow")

    label: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value: Any) -> Any:
        return value.payload if isinstance(value, TaggedStepData) else value


class StartStepData(BaseStepData):
    pass


class EndStepData(BaseStepData):
    pass


class ApiCallStepData(BaseStepData):
    endpoint: Optional[str] = None
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = "GET"
    headers: Dict[str, str] = {}
    body: Optional[str] = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class EmailStepData(BaseStepData):
    to: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None


class TextBoxStepData(BaseStepData):
    text: Optional[str] = None


class ConditionStepData(BaseStepData):
    expression: Optional[str] = None


class GenericStepData(BaseStepData):
    pass


STEP_DATA_MODELS = {
    StepType.START.value: StartStepData,
    StepType.END.value: EndStepData,
    StepType.API_CALL.value: ApiCallStepData,
    StepType.EMAIL.value: EmailStepData,
    StepType.TEXT_BOX.value: TextBoxStepData,
    StepType.CONDITION.value: ConditionStepData,
}
_TAGS_BY_MODEL = {model: tag for tag, model in STEP_DATA_MODELS.items()}


class TaggedStepData:
    """
    Raw step data paired with its step's type while it is being validated.
    Keeps the routing out of the caller's own keys.
    """

    __slots__ = ("step_type", "payload")

    def __init__(self, step_type: str, payload: Dict[str, Any]):
        self.step_type = step_type
        self.payload = payload

    def __repr__(self) -> str:
        return repr(self.payload)


def _step_data_tag(value: Any) -> str:
    if isinstance(value, TaggedStepData):
        kind = value.step_type
    else:
        kind = _TAGS_BY_MODEL.get(type(value))
    return kind if kind in STEP_DATA_MODELS else "generic"


StepData = Annotated[
    Union[
        Annotated[StartStepData, Tag("start")],
        Annotated[EndStepData, Tag("end")],
        Annotated[ApiCallStepData, Tag("api_call")],
        Annotated[EmailStepData, Tag("email")],
        Annotated[TextBoxStepData, Tag("text_box")],
        Annotated[ConditionStepData, Tag("condition")],
        Annotated[GenericStepData, Tag("generic")],
    ],
    Discriminator(_step_data_tag),
]


class Position(BaseModel):
    # Numbers only, "5" is not coerced
    x: Union[StrictInt, StrictFloat]
    y: Union[StrictInt, StrictFloat]


class Step(CamelModel):
    id: str
    type: StepType
    position: Position
    data: StepData = Field(default_factory=GenericStepData)

    @model_validator(mode="before")
    @classmethod
    def _tag_data(cls, values: Any) -> Any:
        """
        Pair ``data`` with the step type so the config is parsed by the
        model registered for that type. ``data`` itself is left untouched.
        """
        if not isinstance(values, dict):
            return values
        step_type = values.get("type")
        if isinstance(step_type, StepType):
            step_type = step_type.value
        data = values.get("data")
        if data is None:
            data = {}
        if not isinstance(step_type, str):
            step_type = ""
        if isinstance(data, dict):
            values = {**values, "data": TaggedStepData(step_type, data)}
        return values

    @field_serializer("data")
    def _dump_data(self, data: BaseStepData) -> Dict[str, Any]:
        # Emit only what the editor stored
        return data.model_dump(mode="json", exclude_unset=True)


class Connection(CamelModel):
    id: str
    source: str
    target: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty_handles(self, handler):
        return {k: v for k, v in handler(self).items() if v is not None}
