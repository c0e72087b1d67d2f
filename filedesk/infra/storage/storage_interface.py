from abc import ABC, abstractmethod
from typing import BinaryIO, Dict


class StorageClientInterface(ABC):
    """
    一个抽象基类 (ABC)，定义了所有存储客户端必须实现的统一接口。
    这确保了上传流程可以与任何存储后端以相同的方式进行交互。
    所有方法都是阻塞调用，异步代码中应通过 run_in_threadpool 调用。
    """

    @abstractmethod
    def put_object(self, object_name: str, data: BinaryIO, length: int, content_type: str) -> Dict:
        """
        上传一个对象（文件）。
        :return: 包含 etag 等信息的字典。
        """

    @abstractmethod
    def open_object(self, object_name: str) -> BinaryIO:
        """
        以二进制流的形式打开一个已存储的对象，调用方负责关闭。
        对象不存在或不可读时抛出异常。
        """

    @abstractmethod
    def remove_object(self, object_name: str) -> None:
        """删除一个对象。对象不存在时静默返回。"""

    @abstractmethod
    def build_final_url(self, object_name: str) -> str:
        """构建最终的可公开访问 URL。同一个 object_name 总是得到同一个 URL。"""
