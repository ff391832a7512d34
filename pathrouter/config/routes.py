# Served when ROUTES_SOURCE is "static". Earlier entries take precedence.
ROUTE_DEFINITIONS = [
    ("users/login", "users#login"),
    ("users/:id", "users#show"),
    ("users/:id/edit", "users#edit", {"role": "admin"}),
    ("test", "test#index"),
]
