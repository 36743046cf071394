"""HTTP routers for treino."""
