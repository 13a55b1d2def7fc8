from datetime import datetime, timezone
from typing import Any, Dict

from rocketpool.models.node_withdrawal import NodeWithdrawalEvent


class NodeWithdrawalMapper(object):
    @staticmethod
    def web3_event_to_node_withdrawal(web3_event: Dict[str, Any]) -> NodeWithdrawalEvent:
        # Handle web3.py processed log format (AttributeDict with an "args" mapping)
        args = web3_event["args"]
        return NodeWithdrawalEvent(
            to=args["_to"],
            ether_amount=args["_etherAmount"],
            reth_amount=args["_rethAmount"],
            rpl_amount=args["_rplAmount"],
            created=datetime.fromtimestamp(args["created"], tz=timezone.utc),
        )
