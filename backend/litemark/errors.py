"""业务异常"""


class LiteMarkError(Exception):
    """业务异常基类"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(LiteMarkError):
    """请求数据不合法，未发生任何写入"""
    pass


class NotFoundError(LiteMarkError):
    """资源不存在"""
    pass


class StorageError(LiteMarkError):
    """主存储读写失败"""
    pass


class BackupError(LiteMarkError):
    """备份写入失败，只在备份内部抛出"""
    pass
