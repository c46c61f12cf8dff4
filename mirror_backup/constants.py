import uuid

INSTANCE_ID = uuid.uuid4().hex[:4]
PACKAGE_ID = 'mirror_backup'

DEFAULT_CONFIG_FILE_NAME = 'mirror_backup_config.json'
