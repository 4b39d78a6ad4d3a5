"""
Layer 1: 目标寻址策略

连接保存一个不透明的目标句柄, 由寻址策略解析成突触后单元:
  - PointerTarget: 直接持有单元引用 (查找零开销)
  - IndexTarget:   只持有整数索引, 通过 NodeTable 按线程解析 (存储更紧凑)

寻址与权重更新算法完全正交: STDPConnection 只调用 get_target(thread),
不关心背后是哪种策略。
"""

from typing import Dict, List

from tuchu.errors import IllegalConnectionError


class NodeTable:
    """按线程划分的单元索引表

    每个线程一张独立的列表, 索引在线程内从 0 开始递增。
    同一单元在同一线程内只占一行, 重复登记返回已有索引。
    宿主仿真器保证同一线程内只有一个写者。
    """

    def __init__(self):
        self._nodes: Dict[int, List[object]] = {}
        # 线程 → {id(node): 索引}; 表持有 node 引用, id 不会被复用
        self._index_of: Dict[int, Dict[int, int]] = {}

    def add(self, node, thread: int = 0) -> int:
        """登记一个单元 (已登记则不重复), 返回它在该线程中的索引"""
        index_of = self._index_of.setdefault(thread, {})
        index = index_of.get(id(node))
        if index is not None:
            return index
        nodes = self._nodes.setdefault(thread, [])
        nodes.append(node)
        index_of[id(node)] = len(nodes) - 1
        return len(nodes) - 1

    def get(self, index: int, thread: int = 0):
        nodes = self._nodes.get(thread)
        if nodes is None or not 0 <= index < len(nodes):
            raise IllegalConnectionError(
                f"线程 {thread} 中不存在索引为 {index} 的目标单元"
            )
        return nodes[index]

    def __len__(self) -> int:
        return sum(len(nodes) for nodes in self._nodes.values())


class PointerTarget:
    """直接引用寻址"""

    __slots__ = ('_node',)

    def __init__(self, node=None):
        self._node = node

    def get_target(self, thread: int = 0):
        return self._node

    def set_target(self, node, thread: int = 0) -> None:
        self._node = node

    def get_target_index(self) -> int:
        """指针寻址没有索引, 与 IndexTarget 接口对齐返回 -1"""
        return -1

    def __repr__(self) -> str:
        return f"PointerTarget({self._node!r})"


class IndexTarget:
    """索引寻址: 目标在 NodeTable 中的位置

    Attributes:
        table: 解析索引用的 NodeTable (多个连接共享同一张表)
    """

    __slots__ = ('table', '_index')

    def __init__(self, table: NodeTable, index: int = -1):
        self.table = table
        self._index = index

    def get_target(self, thread: int = 0):
        if self._index < 0:
            return None
        return self.table.get(self._index, thread)

    def set_target(self, node, thread: int = 0) -> None:
        """把 node 登记进表 (共享目标只占一行) 并记住它的索引"""
        self._index = self.table.add(node, thread)

    def set_target_index(self, index: int) -> None:
        self._index = index

    def get_target_index(self) -> int:
        return self._index

    def __repr__(self) -> str:
        return f"IndexTarget(index={self._index})"
