"""
Partitioner - 区间划分与并行执行

长度为 N 的轴被划分为 W 个区间：
- 前 W-1 个区间长度为 N // W
- 最后一个区间延伸到 N（承担余数）

每个 worker 只写入自己区间对应的输出区域，因此无需加锁。
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable

# 默认 worker 数量
DEFAULT_NUM_WORKERS = 4


def partition(length: int, num_workers: int = DEFAULT_NUM_WORKERS) -> list[tuple[int, int]]:
    """
    将 [0, length) 划分为 num_workers 个区间

    Args:
        length: 轴长度
        num_workers: worker 数量

    Returns:
        [(start, end), ...]，长度等于 num_workers；
        num_workers > length 时前面的区间为空
    """
    if num_workers < 1:
        raise ValueError(f"num_workers 必须 >= 1，当前: {num_workers}")
    if length < 0:
        raise ValueError(f"length 不能为负，当前: {length}")

    tile = length // num_workers
    ranges = []
    for i in range(num_workers):
        start = i * tile
        end = length if i == num_workers - 1 else (i + 1) * tile
        ranges.append((start, end))
    return ranges


def run_partitioned(
    length: int,
    fn: Callable[[int, int], None],
    num_workers: int = DEFAULT_NUM_WORKERS
) -> None:
    """
    按区间并行执行 fn(start, end)，等待全部完成

    每次调用创建独立的线程池，返回前 join 所有 worker。
    任一 worker 抛出的异常会在此处重新抛出。

    Args:
        length: 轴长度
        fn: 处理单个区间的函数
        num_workers: worker 数量
    """
    ranges = [(s, e) for s, e in partition(length, num_workers) if e > s]
    if not ranges:
        return

    if len(ranges) == 1:
        fn(*ranges[0])
        return

    with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
        futures = [executor.submit(fn, start, end) for start, end in ranges]

    # with 退出时所有 worker 已结束
    for future in futures:
        future.result()
