from tripsettle.settlement import compute_balances, compute_transfers, describe_transfers, settle

__all__ = ['compute_balances', 'compute_transfers', 'describe_transfers', 'settle']
