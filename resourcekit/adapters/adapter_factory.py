"""
An Adapter factory to control database type and table access
"""


class AdapterFactory:
    """Factory class for creating and managing adapter instances.

    The backend is named explicitly with ``configure``; ``get`` then builds
    one adapter per table for that backend and caches it.
    """
    BACKENDS = ("mongo", "rethink", "dynamo", "memory")

    _instances = {}
    _backend = None
    _mongo_client = None
    _mongo_database = None
    _rethink_conn = None
    _rethink_database = None
    _dynamo_client = None

    @staticmethod
    def get_mongo_client(flask_app):
        """Get MongoDB client instance.

        Args:
            flask_app: Flask application instance with MongoDB configuration

        Returns:
            MongoDB client instance
        """
        # Import locally to avoid hard dependency when MongoDB not used
        from pymongo import MongoClient

        # connect to cluster string
        user = flask_app.config.get("MONGODB_USER", "")
        password = flask_app.config.get("MONGODB_PASSWORD", "")
        server = flask_app.config.get("MONGODB_SERVER", "")
        if user:
            mongo_uri = f'mongodb://{user}:{password}@{server}'
        else:
            mongo_uri = f'mongodb://{server}'
        return MongoClient(mongo_uri)

    @staticmethod
    def get_rethink_connection(flask_app):
        """Get RethinkDB connection.

        Args:
            flask_app: Flask application instance with RethinkDB configuration

        Returns:
            RethinkDB connection
        """
        # Import locally to avoid hard dependency when RethinkDB not used
        from resourcekit.adapters.rethink_adapter import r

        return r.connect(
            host=flask_app.config.get("RETHINKDB_HOST", "localhost"),
            port=int(flask_app.config.get("RETHINKDB_PORT", 28015))
        )

    @staticmethod
    def get_dynamodb_client(flask_app):
        """Get DynamoDB client instance.

        Args:
            flask_app: Flask application instance with DynamoDB configuration

        Returns:
            DynamoDB client instance
        """
        # Import locally to avoid hard dependency when DynamoDB not used
        import boto3
        session = boto3.Session(
            aws_access_key_id=flask_app.config.get("DYNAMODB_ACCESS_KEY"),
            aws_secret_access_key=flask_app.config.get("DYNAMODB_SECRET_KEY"),
            region_name=flask_app.config.get("DYNAMODB_REGION", "us-west-2")
        )
        return session.resource("dynamodb", endpoint_url=flask_app.config.get("DYNAMODB_ENDPOINT"))

    @classmethod
    def configure(cls, backend: str, *, mongo_client=None, mongo_database=None,
                  rethink_conn=None, rethink_database=None, dynamo_client=None, flask_app=None):
        """Configure the adapter factory with backend and clients.

        Clients that are not passed are built from the Flask app config when
        an app is given.

        Args:
            backend: Database backend type ('mongo', 'rethink', 'dynamo' or 'memory')
            mongo_client: Optional MongoDB client instance
            mongo_database: Optional MongoDB database name
            rethink_conn: Optional RethinkDB connection
            rethink_database: Optional RethinkDB database name
            dynamo_client: Optional DynamoDB client instance
            flask_app: Optional Flask app to build missing clients from
        """
        cls._instances = {}
        cls._backend = backend.lower()
        cls._mongo_client = mongo_client
        cls._mongo_database = mongo_database
        cls._rethink_conn = rethink_conn
        cls._rethink_database = rethink_database
        cls._dynamo_client = dynamo_client

        if flask_app is None:
            return

        if cls._backend == "mongo":
            cls._mongo_database = mongo_database or flask_app.config.get("MONGODB_DATABASE")
            if cls._mongo_client is None:
                cls._mongo_client = cls.get_mongo_client(flask_app)
        elif cls._backend == "rethink":
            cls._rethink_database = rethink_database or flask_app.config.get("RETHINKDB_DB")
            if cls._rethink_conn is None:
                cls._rethink_conn = cls.get_rethink_connection(flask_app)
        elif cls._backend == "dynamo" and cls._dynamo_client is None:
            cls._dynamo_client = cls.get_dynamodb_client(flask_app)

    @classmethod
    def get_backend(cls):
        """Return the configured backend name, or None."""
        return cls._backend

    @classmethod
    def get(cls, table_name: str, *, key_field="key"):
        """Get or create an adapter instance for the specified table.

        Args:
            table_name: Name of the table or collection
            key_field: Hash key of the table, used by the DynamoDB backend only

        Returns:
            Adapter instance for the specified table

        Raises:
            ValueError: If factory is not configured or backend is unsupported
        """
        if cls._backend is None:
            raise ValueError("AdapterFactory not configured.")

        if table_name in cls._instances:
            return cls._instances[table_name]

        # Lazy imports to avoid importing unused backends at module import time
        if cls._backend == "mongo":
            from resourcekit.adapters.mongo_adapter import MongoAdapter
            if cls._mongo_client is None or not cls._mongo_database:
                raise ValueError("MongoDB client and database must be configured")
            adapter = MongoAdapter(cls._mongo_client[cls._mongo_database][table_name])
        elif cls._backend == "rethink":
            from resourcekit.adapters.rethink_adapter import RethinkAdapter
            adapter = RethinkAdapter(table_name, conn=cls._rethink_conn, db_name=cls._rethink_database)
        elif cls._backend == "dynamo":
            from resourcekit.adapters.dynamo_adapter import DynamoAdapter
            adapter = DynamoAdapter(table_name, key_field=key_field, dynamo_client=cls._dynamo_client)
        elif cls._backend == "memory":
            from resourcekit.adapters.memory_adapter import MemoryAdapter
            adapter = MemoryAdapter(table_name)
        else:
            raise ValueError(f"Unsupported backend: {cls._backend}")

        cls._instances[table_name] = adapter
        return adapter
