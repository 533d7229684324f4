"""
Node group model.
"""

from typing import List, Optional

from pydantic import BaseModel


class NodeGroup(BaseModel):
    """
    A user-created group of nodes (e.g. a room). Groups may nest.
    """

    group_name: Optional[str] = None
    group_id: Optional[str] = None
    type: Optional[str] = None
    nodes: Optional[List[str]] = None
    sub_groups: Optional[List["NodeGroup"]] = None


NodeGroup.model_rebuild()
