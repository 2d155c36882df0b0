from .step_10_create_account import CreateAccountStep
from .step_20_create_data_dir import CreateDataDirStep
from .step_30_create_config_dirs import CreateConfigDirsStep
from .step_40_restrict_data_dir import RestrictDataDirStep

__all__ = [
    "CreateAccountStep",
    "CreateDataDirStep",
    "CreateConfigDirsStep",
    "RestrictDataDirStep",
]
