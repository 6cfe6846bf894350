"""Event models for the Hyprland notification socket (.socket2.sock).

Every notification line decodes into exactly one of the frozen pydantic
models below. Field order in each class is the wire order of the
comma-separated payload; the catalog derives its descriptors from it.

Field types are restricted to:
- str: text, taken verbatim
- UInt32: unsigned 32-bit integer
- bool: "1" is true, any other text is false
"""

from typing import Annotated, Any, ClassVar, Dict, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


UINT32_MAX = 0xFFFFFFFF

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]


class HyprlandEvent(BaseModel):
    """Base class for all decoded notifications.

    Instances are immutable and compare by value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    TAG: ClassVar[str] = ""

    @property
    def event_tag(self) -> str:
        """Wire tag this event was decoded from."""
        return self.TAG

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary with the tag under 'event', for structured output."""
        return {"event": self.event_tag, **self.model_dump()}


# =============================================================================
# Workspaces
# =============================================================================

class Workspace(HyprlandEvent):
    """Workspace changed on user request (not on mouse movement).

    Format: workspace>>WORKSPACENAME
    """
    TAG: ClassVar[str] = "workspace"

    name: str


class WorkspaceV2(HyprlandEvent):
    """Workspace changed, with id.

    Format: workspacev2>>WORKSPACEID,WORKSPACENAME
    """
    TAG: ClassVar[str] = "workspacev2"

    id: UInt32
    name: str


class CreateWorkspace(HyprlandEvent):
    """Format: createworkspace>>WORKSPACENAME"""
    TAG: ClassVar[str] = "createworkspace"

    name: str


class CreateWorkspaceV2(HyprlandEvent):
    """Format: createworkspacev2>>WORKSPACEID,WORKSPACENAME"""
    TAG: ClassVar[str] = "createworkspacev2"

    id: UInt32
    name: str


class DestroyWorkspace(HyprlandEvent):
    """Format: destroyworkspace>>WORKSPACENAME"""
    TAG: ClassVar[str] = "destroyworkspace"

    name: str


class DestroyWorkspaceV2(HyprlandEvent):
    """Format: destroyworkspacev2>>WORKSPACEID,WORKSPACENAME"""
    TAG: ClassVar[str] = "destroyworkspacev2"

    id: UInt32
    name: str


class MoveWorkspace(HyprlandEvent):
    """Workspace moved to a different monitor.

    Format: moveworkspace>>WORKSPACENAME,MONNAME
    """
    TAG: ClassVar[str] = "moveworkspace"

    name: str
    monitor: str


class MoveWorkspaceV2(HyprlandEvent):
    """Format: moveworkspacev2>>WORKSPACEID,WORKSPACENAME,MONNAME"""
    TAG: ClassVar[str] = "moveworkspacev2"

    id: UInt32
    name: str
    monitor: str


class RenameWorkspace(HyprlandEvent):
    """Format: renameworkspace>>WORKSPACEID,NEWNAME"""
    TAG: ClassVar[str] = "renameworkspace"

    id: UInt32
    new_name: str


class ActiveSpecial(HyprlandEvent):
    """Special workspace shown on a monitor changed.

    Closing the special workspace yields an empty name.

    Format: activespecial>>WORKSPACENAME,MONNAME
    """
    TAG: ClassVar[str] = "activespecial"

    name: str
    monitor: str


# =============================================================================
# Monitors
# =============================================================================

class FocusedMon(HyprlandEvent):
    """Active monitor changed.

    Format: focusedmon>>MONNAME,WORKSPACENAME
    """
    TAG: ClassVar[str] = "focusedmon"

    monitor: str
    workspace: str


class MonitorRemoved(HyprlandEvent):
    """Format: monitorremoved>>MONITORNAME"""
    TAG: ClassVar[str] = "monitorremoved"

    monitor: str


class MonitorAdded(HyprlandEvent):
    """Format: monitoradded>>MONITORNAME"""
    TAG: ClassVar[str] = "monitoradded"

    monitor: str


class MonitorAddedV2(HyprlandEvent):
    """Format: monitoraddedv2>>MONITORID,MONITORNAME,MONITORDESCRIPTION"""
    TAG: ClassVar[str] = "monitoraddedv2"

    id: UInt32
    monitor: str
    description: str


# =============================================================================
# Windows
# =============================================================================

class ActiveWindow(HyprlandEvent):
    """Active window changed.

    Format: activewindow>>WINDOWCLASS,WINDOWTITLE
    """
    TAG: ClassVar[str] = "activewindow"

    window_class: str
    title: str


class ActiveWindowV2(HyprlandEvent):
    """Format: activewindowv2>>WINDOWADDRESS"""
    TAG: ClassVar[str] = "activewindowv2"

    address: str


class Fullscreen(HyprlandEvent):
    """Fullscreen state of the active window changed.

    Format: fullscreen>>0/1 (exit / enter)
    """
    TAG: ClassVar[str] = "fullscreen"

    entered: bool


class OpenWindow(HyprlandEvent):
    """Format: openwindow>>WINDOWADDRESS,WORKSPACENAME,WINDOWCLASS,WINDOWTITLE"""
    TAG: ClassVar[str] = "openwindow"

    address: str
    workspace: str
    window_class: str
    title: str


class CloseWindow(HyprlandEvent):
    """Format: closewindow>>WINDOWADDRESS"""
    TAG: ClassVar[str] = "closewindow"

    address: str


class MoveWindow(HyprlandEvent):
    """Window moved to a workspace.

    Format: movewindow>>WINDOWADDRESS,WORKSPACENAME
    """
    TAG: ClassVar[str] = "movewindow"

    address: str
    workspace: str


class MoveWindowV2(HyprlandEvent):
    """Format: movewindowv2>>WINDOWADDRESS,WORKSPACEID,WORKSPACENAME"""
    TAG: ClassVar[str] = "movewindowv2"

    address: str
    id: UInt32
    workspace: str


class WindowTitle(HyprlandEvent):
    """Title of a window changed. Only the address is sent.

    Format: windowtitle>>WINDOWADDRESS
    """
    TAG: ClassVar[str] = "windowtitle"

    address: str


class ChangeFloatingMode(HyprlandEvent):
    """Format: changefloatingmode>>WINDOWADDRESS,FLOATING"""
    TAG: ClassVar[str] = "changefloatingmode"

    address: str
    floating: bool


class Urgent(HyprlandEvent):
    """Format: urgent>>WINDOWADDRESS"""
    TAG: ClassVar[str] = "urgent"

    address: str


class Minimize(HyprlandEvent):
    """Window requested a change to its minimized state.

    Format: minimize>>WINDOWADDRESS,MINIMIZED
    """
    TAG: ClassVar[str] = "minimize"

    address: str
    minimized: bool


class Pin(HyprlandEvent):
    """Format: pin>>WINDOWADDRESS,PINSTATE"""
    TAG: ClassVar[str] = "pin"

    address: str
    pinned: bool


# =============================================================================
# Layers, input, groups, misc
# =============================================================================

class OpenLayer(HyprlandEvent):
    """Layer surface mapped.

    Format: openlayer>>NAMESPACE
    """
    TAG: ClassVar[str] = "openlayer"

    namespace: str


class CloseLayer(HyprlandEvent):
    """Layer surface unmapped.

    Format: closelayer>>NAMESPACE
    """
    TAG: ClassVar[str] = "closelayer"

    namespace: str


class ActiveLayout(HyprlandEvent):
    """Keyboard layout changed.

    Format: activelayout>>KEYBOARDNAME,LAYOUTNAME
    """
    TAG: ClassVar[str] = "activelayout"

    keyboard: str
    layout: str


class Submap(HyprlandEvent):
    """Keybind submap changed. Empty name means the default submap.

    Format: submap>>SUBMAPNAME
    """
    TAG: ClassVar[str] = "submap"

    name: str


class Screencast(HyprlandEvent):
    """Screencopy state of a client changed.

    Format: screencast>>STATE,OWNER
    """
    TAG: ClassVar[str] = "screencast"

    OWNER_MONITOR: ClassVar[int] = 0
    OWNER_WINDOW: ClassVar[int] = 1

    active: bool
    owner: UInt32

    @property
    def is_window_share(self) -> bool:
        return self.owner == self.OWNER_WINDOW


class IgnoreGroupLock(HyprlandEvent):
    """Format: ignoregrouplock>>0/1"""
    TAG: ClassVar[str] = "ignoregrouplock"

    state: bool


class LockGroups(HyprlandEvent):
    """Format: lockgroups>>0/1"""
    TAG: ClassVar[str] = "lockgroups"

    state: bool


class ConfigReloaded(HyprlandEvent):
    """Configuration reloaded. Carries no fields.

    Format: configreloaded>>
    """
    TAG: ClassVar[str] = "configreloaded"


class UnknownEvent(HyprlandEvent):
    """Notification whose tag is not in the catalog.

    Keeps the tag and raw payload so newer compositor versions are never
    silently misclassified.
    """

    tag: str
    payload: str

    @property
    def event_tag(self) -> str:
        return self.tag


# Registration order is the order `tags` lists them in.
EVENT_TYPES: Tuple[Type[HyprlandEvent], ...] = (
    Workspace,
    WorkspaceV2,
    FocusedMon,
    ActiveWindow,
    ActiveWindowV2,
    Fullscreen,
    MonitorRemoved,
    MonitorAdded,
    MonitorAddedV2,
    CreateWorkspace,
    CreateWorkspaceV2,
    DestroyWorkspace,
    DestroyWorkspaceV2,
    MoveWorkspace,
    MoveWorkspaceV2,
    RenameWorkspace,
    ActiveSpecial,
    ActiveLayout,
    OpenWindow,
    CloseWindow,
    MoveWindow,
    MoveWindowV2,
    WindowTitle,
    OpenLayer,
    CloseLayer,
    Submap,
    ChangeFloatingMode,
    Urgent,
    Minimize,
    Screencast,
    IgnoreGroupLock,
    LockGroups,
    Pin,
    ConfigReloaded,
)
