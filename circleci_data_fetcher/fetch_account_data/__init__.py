from .fetch_account_data import fetch_account_data, fetch_accounts, fetch_report

__all__ = ["fetch_account_data", "fetch_accounts", "fetch_report"]
