from .step_10_download import DownloadStep
from .step_20_extract import ExtractStep
from .step_30_mount_rootfs import MountRootfsStep
from .step_40_install_helpers import InstallHelpersStep
from .step_50_configure_mirror import ConfigureMirrorStep
from .step_60_bootstrap_pacman import BootstrapPacmanStep
from .step_65_install_packages import InstallPackagesStep
from .step_70_create_user import CreateUserStep
from .step_80_mount_home import MountHomeStep
from .step_85_configure_sudo import ConfigureSudoStep
from .step_90_cleanup import CleanupStep
from .step_99_emit_outputs import EmitOutputsStep

__all__ = [
    "DownloadStep",
    "ExtractStep",
    "MountRootfsStep",
    "InstallHelpersStep",
    "ConfigureMirrorStep",
    "BootstrapPacmanStep",
    "InstallPackagesStep",
    "CreateUserStep",
    "MountHomeStep",
    "ConfigureSudoStep",
    "CleanupStep",
    "EmitOutputsStep",
]
