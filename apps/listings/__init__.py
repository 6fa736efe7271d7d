"""Shopee listing app: authorization, uploads, AI copy and publishing."""
