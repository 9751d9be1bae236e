"""Pydantic v2 schemas for API requests/responses and structured LLM output."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from agent_directeur.domain.enums import Priority, SpecialistName


# ---------------------------------------------------------------------------
# Director run
# ---------------------------------------------------------------------------


class RunRequest(BaseModel):
    """Inbound director request.

    The legacy French keys (``demande_client``, ``contexte``,
    ``contraintes``) are still accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    request: str = Field(
        "", validation_alias=AliasChoices("request", "demande_client")
    )
    context: str = Field("", validation_alias=AliasChoices("context", "contexte"))
    constraints: str = Field(
        "", validation_alias=AliasChoices("constraints", "contraintes")
    )
    consult_specialists: bool = False


class DoctrineEntry(BaseModel):
    """A doctrine rule the director wants recorded."""

    title: str
    category: str
    content: str
    active: bool
    version: str = "V1"


class DecisionEntry(BaseModel):
    """A strategic decision to append to the decisions table."""

    title: str
    status: str
    domain: str
    justification: str
    impact: str


class ProjectEntry(BaseModel):
    """A project to create or refresh in the projects table."""

    title: str
    objective: str
    status: str
    priority: str
    domain: str


class NotionWrites(BaseModel):
    """Records proposed by the director, grouped per target table."""

    doctrine: list[DoctrineEntry] = Field(default_factory=list)
    decisions: list[DecisionEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)


class DirectorDecision(BaseModel):
    """Structured decision returned by the director model call."""

    request_type: str = Field(..., description="Kind of request (formation, offre, pilotage...).")
    domain: str = Field(..., description="Business domain the request belongs to.")
    strategic_decision: bool = Field(..., description="True if the request implies a strategic decision.")
    new_project: bool = Field(..., description="True if the request opens a new project.")
    priority: Priority
    director_decision: str = Field(..., description="The single choice the director imposes.")
    validated_brief: str
    qualiopi_structure: str
    final_deliverable: str
    notion_writes: NotionWrites = Field(default_factory=NotionWrites)
    next_actions: list[str] = Field(default_factory=list)
    specialists: list[SpecialistName] = Field(
        default_factory=list,
        description="Specialist agents to mobilise for this request.",
    )


# ---------------------------------------------------------------------------
# Specialists
# ---------------------------------------------------------------------------


class SpecialistRequest(BaseModel):
    """Fixed payload shape accepted by every specialist."""

    brief: str
    context: str = ""
    constraints: str = ""


class SpecialistOutput(BaseModel):
    """Structured answer of one specialist."""

    specialist: SpecialistName
    deliverable: str
    warnings: list[str] = Field(default_factory=list)


class SpecialistResult(BaseModel):
    """A specialist call as reported in a run response."""

    specialist: SpecialistName
    ok: bool
    output: SpecialistOutput | None = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class WriteRecord(BaseModel):
    """Serialized outcome of one external write."""

    table_id: str
    record_id: str
    action: str
    title: str = ""


class RunResponse(BaseModel):
    """Successful director run."""

    ok: bool = True
    data: DirectorDecision
    specialists: list[SpecialistResult] = Field(default_factory=list)
    writes: list[WriteRecord] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Failure payload: a flag and the raw error message."""

    ok: bool = False
    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
