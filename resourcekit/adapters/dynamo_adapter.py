"""DynamoDB adapter implementation for database operations."""

import hashlib
import uuid
from decimal import Decimal

from botocore.exceptions import ClientError

from resourcekit.base.base_adapter import BaseAdapter


def convert_floats_to_decimals(obj):
    """
    Recursively convert float values to Decimal types for DynamoDB compatibility

    Args:
        obj: The object to convert (dict, list, or primitive type)

    Returns:
        The converted object with floats replaced by Decimals
    """
    if isinstance(obj, dict):
        return {key: convert_floats_to_decimals(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [convert_floats_to_decimals(item) for item in obj]
    if isinstance(obj, float):
        return Decimal(str(obj))
    # Return as is if not float
    return obj


def convert_decimals_to_numbers(obj):
    """
    Recursively convert Decimal values back to int or float

    Whole Decimals become ints, which keeps auto-index values integral.

    Args:
        obj: The object to convert (dict, list, or primitive type)

    Returns:
        The converted object with Decimals replaced by ints or floats
    """
    if isinstance(obj, dict):
        return {key: convert_decimals_to_numbers(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [convert_decimals_to_numbers(item) for item in obj]
    if isinstance(obj, Decimal):
        return int(obj) if obj % 1 == 0 else float(obj)
    return obj


def generate_key() -> str:
    """Generate a unique native key for a new item."""
    hash_m = hashlib.sha1()
    hash_m.update(uuid.uuid4().hex.encode())
    return hash_m.hexdigest()


def is_conditional_check_failure(error: ClientError) -> bool:
    """Check if a ClientError was raised by a failed ConditionExpression."""
    return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


def build_filter(predicate: dict, joiner: str = " AND ") -> dict:
    """
    Build scan arguments matching property values

    Args:
        predicate: Property-value pairs to compare for equality
        joiner: How the comparisons combine, " AND " or " OR "

    Returns:
        Keyword arguments for Table.scan, empty for an empty predicate
    """
    if not predicate:
        return {}

    conditions = []
    expr_attr_names = {}
    expr_attr_vals = {}
    for position, (name, value) in enumerate(predicate.items()):
        conditions.append(f"#f{position} = :v{position}")
        expr_attr_names[f"#f{position}"] = name
        expr_attr_vals[f":v{position}"] = value

    return {
        'FilterExpression': joiner.join(conditions),
        'ExpressionAttributeNames': expr_attr_names,
        'ExpressionAttributeValues': convert_floats_to_decimals(expr_attr_vals)
    }


class DynamoAdapter(BaseAdapter):
    """DynamoDB adapter providing the resource operations on one table.

    The table's hash key is the native identity. Lookups by any other
    property scan the table.
    """

    id_field = "key"

    def __init__(self, table_name: str, key_field: str = "key", dynamo_client=None):
        if dynamo_client is None:
            raise ValueError("dynamo_client must be provided")
        self.id_field = key_field
        self.table = dynamo_client.Table(table_name)

    def _scan(self, **scan_kwargs) -> list:
        items = []
        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_key

        return [convert_decimals_to_numbers(item) for item in items]

    def init(self, index_field: str = None):
        # Scans need no secondary index
        return None

    def find(self, predicate: dict) -> list:
        try:
            return self._scan(**build_filter(predicate))
        except Exception as e:
            raise Exception(f"Failed to find items in DynamoDB: {str(e)}") from e

    def get(self, native_id):
        try:
            response = self.table.get_item(Key={self.id_field: native_id})
        except Exception as e:
            raise Exception(f"Failed to retrieve item with key '{native_id}' from DynamoDB: {str(e)}") from e

        item = response.get("Item")
        return convert_decimals_to_numbers(item) if item else None

    def insert(self, doc: dict):
        item = dict(doc)
        item.setdefault(self.id_field, generate_key())

        try:
            self.table.put_item(
                Item=convert_floats_to_decimals(item),
                ConditionExpression="attribute_not_exists(#key)",
                ExpressionAttributeNames={"#key": self.id_field}
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                return None
            raise Exception(f"Failed to create item in DynamoDB: {str(e)}") from e

        return item

    def update(self, native_id, doc: dict):
        changes = dict(doc)
        changes.pop(self.id_field, None)
        if not changes:
            return self.get(native_id)

        update_expr = []
        expr_attr_vals = {}
        expr_attr_names = {"#key": self.id_field}

        for position, (k, v) in enumerate(changes.items()):
            # Use expression attribute names to handle reserved keywords
            attr_name = f"#attr_{position}"
            attr_val = f":val_{position}"
            update_expr.append(f"{attr_name} = {attr_val}")
            expr_attr_vals[attr_val] = v
            expr_attr_names[attr_name] = k

        try:
            self.table.update_item(
                Key={self.id_field: native_id},
                UpdateExpression="SET " + ", ".join(update_expr),
                ConditionExpression="attribute_exists(#key)",
                ExpressionAttributeValues=convert_floats_to_decimals(expr_attr_vals),
                ExpressionAttributeNames=expr_attr_names
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                return None
            raise Exception(f"Failed to update item with key '{native_id}' in DynamoDB: {str(e)}") from e

        return self.get(native_id)

    def delete(self, native_id) -> bool:
        try:
            response = self.table.delete_item(
                Key={self.id_field: native_id},
                ReturnValues="ALL_OLD"
            )
        except Exception as e:
            raise Exception(f"Failed to delete item with key '{native_id}' from DynamoDB: {str(e)}") from e

        return bool(response.get("Attributes"))

    def next_index(self, index_field: str) -> int:
        try:
            items = self._scan(
                ProjectionExpression="#idx",
                ExpressionAttributeNames={"#idx": index_field}
            )
        except Exception as e:
            raise Exception(f"Failed to read '{index_field}' values from DynamoDB: {str(e)}") from e

        values = [item[index_field] for item in items if isinstance(item.get(index_field), int)]
        return max(values) + 1 if values else 0

    def check_unique_values(self, unique_fields: dict) -> list:
        if not unique_fields:
            return []

        try:
            items = self._scan(**build_filter(unique_fields, joiner=" OR "))
        except Exception as e:
            raise Exception(f"Failed to check unique values in DynamoDB: {str(e)}") from e

        return [
            name for name, value in unique_fields.items()
            if any(item.get(name) == value for item in items)
        ]
