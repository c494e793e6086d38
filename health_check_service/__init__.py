"""
Health Check Service - probes the Auth Service RPC surface on a timer and
reports outcome and latency of every synthetic call.
"""
