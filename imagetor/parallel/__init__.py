"""
Parallel 模块 - 工作线程划分

职责：
- 将一个轴划分为互不重叠且完整覆盖的区间
- 每次批量操作启动固定数量的 worker，全部完成后才返回
"""

from .partitioner import DEFAULT_NUM_WORKERS, partition, run_partitioned

__all__ = ["DEFAULT_NUM_WORKERS", "partition", "run_partitioned"]
