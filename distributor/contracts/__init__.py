from distributor.contracts.token_holder import TokenHolderContract

__all__ = ["TokenHolderContract"]
