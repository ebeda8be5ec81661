"""
TourGuide 位置追踪与奖励服务
"""
