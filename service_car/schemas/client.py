from pydantic import BaseModel, ConfigDict
from typing import Optional


# Client as served by the remote client service. This service keeps no copy:
# instances are built per request from the remote response and dropped after
# serialization.
class Client(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    # Fields the client service adds later are dropped rather than rejected
    model_config = ConfigDict(extra="ignore")
