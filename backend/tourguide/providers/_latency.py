import random
import time


def simulate_latency(max_latency_ms: int):
    """模拟外部服务的随机响应延迟"""
    if max_latency_ms > 0:
        time.sleep(random.randint(1, max_latency_ms) / 1000)
