from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FigmaNode(BaseModel):
    """One node of the plugin's extracted tree.

    Only identity and box are required; paint, typography, layout and
    asset fields are passed through untouched.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    type: str
    width: float
    height: float
    x: float = 0
    y: float = 0
    opacity: float = 1
    visible: bool = True
    children: Optional[List["FigmaNode"]] = None


FigmaNode.model_rebuild()


class GenerateRequest(BaseModel):
    data: List[FigmaNode] = Field(default_factory=list)

    def node_dicts(self) -> list:
        return [node.model_dump(exclude_none=True) for node in self.data]
