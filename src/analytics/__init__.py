"""
Analytics Module

Query/aggregation engine over the orders, customers and products
collections:

- codec: UUID string <-> BSON binary subtype 4
- normalizer: native or legacy-string product lists -> OrderLine
- spending, top_products, sales, customer_orders: the four queries
"""
