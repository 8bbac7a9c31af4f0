"""
Thin repository over the single pelodata DynamoDB table.

Items are addressed by their Id partition key. There are no secondary
indexes, so every filtered lookup is a full-table scan.
"""

import logging
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, ConditionBase

from pelodata.config import Config

logger = logging.getLogger(__name__)


class ItemRepository:
    """scan / get / put / delete against one table."""

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_config(cls, config: Config) -> "ItemRepository":
        config.require_table()
        dynamodb = boto3.resource('dynamodb', region_name=config.table_region)
        logger.info("Using table %s in %s", config.table_name, config.table_region)
        return cls(dynamodb.Table(config.table_name))

    def scan(self, condition: ConditionBase) -> List[Dict[str, Any]]:
        """Return every item matching ``condition``, following scan pages."""
        items = []
        scan_kwargs = {'FilterExpression': condition}
        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            scan_kwargs['ExclusiveStartKey'] = last_key

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        response = self.table.get_item(Key={'Id': item_id})
        return response.get('Item')

    def put(self, item: Dict[str, Any], condition: Optional[ConditionBase] = None) -> None:
        put_kwargs = {'Item': item}
        if condition is not None:
            put_kwargs['ConditionExpression'] = condition
        self.table.put_item(**put_kwargs)

    def put_new(self, item: Dict[str, Any]) -> None:
        """Put an item, refusing to overwrite one that already has its Id."""
        self.put(item, condition=Attr('Id').not_exists())

    def delete(self, item_id: str) -> None:
        self.table.delete_item(Key={'Id': item_id})
