from pydantic import BaseModel, ConfigDict


class EntryModel(BaseModel):
    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

from .entry import ENTRY_FIELDS, DESKTOP_ENTRY_GROUP, DesktopEntry, EntryField, FieldSpec, Group
from .generic import GenericEntry, MimeApps, Thumbnailer
