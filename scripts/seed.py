"""Development seeder: a handful of authors, tags, tagged articles and a comment thread."""
import argparse
import asyncio
import time
import unicodedata

from blog_api.config import settings
from blog_api.database import Database
from blog_api.models import Article, ArticleTag, Comment, Tag, User
from blog_api.security import hash_password

DEFAULT_PASSWORD = "123456"

ARTICLES = [
    {
        "title": "A Revolução da Grão Direto no Agronegócio",
        "author": "Fred Marques",
        "content": (
            "A Grão Direto tem transformado o setor agrícola ao introduzir tecnologia de ponta "
            "para conectar produtores e compradores de grãos. A plataforma utiliza algoritmos "
            "para recomendar preços baseados em dados de mercado em tempo real."
        ),
        "tags": ["Tecnologia", "Agronegócio"],
    },
    {
        "title": "Implementando CI/CD em Ambientes Ágeis",
        "author": "Carlos Henrique",
        "content": (
            "Integração contínua e entrega contínua tornaram-se essenciais no desenvolvimento "
            "de software moderno. Pipelines bem configuradas reduzem o tempo de entrega de "
            "novas funcionalidades e a probabilidade de erros em produção."
        ),
        "tags": ["CI/CD", "DevOps", "Agilidade"],
    },
    {
        "title": "Bancos de Dados NoSQL em Sistemas Escaláveis",
        "author": "Carlos Eduardo",
        "content": (
            "Bancos NoSQL como MongoDB e Cassandra se destacam pela flexibilidade e "
            "escalabilidade, sendo ideais para redes sociais, e-commerce e sistemas de "
            "recomendação que armazenam grandes volumes de dados não estruturados."
        ),
        "tags": ["NoSQL", "Escala"],
    },
    {
        "title": "Como Kubernetes Revolucionou a Orquestração de Contêineres",
        "author": "Geovana Rocha",
        "content": (
            "Kubernetes se tornou a principal solução para orquestração de contêineres, "
            "permitindo implantar, escalar e gerenciar aplicações com alta disponibilidade "
            "e automatizar balanceamento de carga e escalonamento."
        ),
        "tags": ["Kubernetes", "DevOps", "Orquestração"],
    },
    {
        "title": "A Evolução do Frontend com Frameworks Modernos",
        "author": "Geovana Rocha",
        "content": (
            "React, Angular e Vue.js permitem criar interfaces dinâmicas e responsivas com "
            "maior facilidade. Componentização e gerenciamento de estado trouxeram mais "
            "organização ao código e facilitaram a manutenção dos projetos."
        ),
        "tags": ["Frontend", "React"],
    },
]

COMMENTS = [
    (0, "Carlos Henrique", "Excelente artigo! A Grão Direto realmente está mudando o agronegócio."),
    (1, "Fred Marques", "Muito útil! Já estou aplicando essas práticas de CI/CD no meu projeto."),
    (3, "Carlos Eduardo", "Kubernetes mudou completamente a forma como trabalhamos com contêineres."),
]


def name_to_email(name: str) -> str:
    ascii_name = unicodedata.normalize("NFD", name.lower()).encode("ascii", "ignore").decode()
    return ".".join(ascii_name.split()) + "@email.com"


async def seed(database: Database) -> None:
    start = time.perf_counter()

    await database.drop_all()
    await database.create_all()

    async with database.session() as session:
        password = hash_password(DEFAULT_PASSWORD)

        users: dict[str, User] = {}
        for entry in ARTICLES:
            name = entry["author"]
            if name not in users:
                users[name] = User(name=name, email=name_to_email(name), password=password)
                session.add(users[name])
        await session.flush()
        print(f"  Created {len(users)} users (password: {DEFAULT_PASSWORD})")

        tags: dict[str, Tag] = {}
        for entry in ARTICLES:
            for tag_name in entry["tags"]:
                if tag_name not in tags:
                    tags[tag_name] = Tag(name=tag_name)
                    session.add(tags[tag_name])
        await session.flush()
        print(f"  Created {len(tags)} tags")

        articles: list[Article] = []
        for entry in ARTICLES:
            article = Article(
                title=entry["title"],
                content=entry["content"],
                author_id=users[entry["author"]].id,
            )
            session.add(article)
            articles.append(article)
        await session.flush()

        links = 0
        for article, entry in zip(articles, ARTICLES):
            for tag_name in entry["tags"]:
                session.add(ArticleTag(article_id=article.id, tag_id=tags[tag_name].id))
                links += 1
        await session.flush()
        print(f"  Created {len(articles)} articles with {links} tag links")

        for index, author, content in COMMENTS:
            root = Comment(content=content, article_id=articles[index].id, user_id=users[author].id)
            session.add(root)
            await session.flush()
            reply_author = ARTICLES[index]["author"]
            session.add(Comment(
                content="Obrigado pelo comentário!",
                article_id=articles[index].id,
                user_id=users[reply_author].id,
                parent_id=root.id,
            ))
        await session.flush()
        print(f"  Created {len(COMMENTS)} comment threads")

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


async def run(url: str) -> None:
    database = Database(url)
    try:
        await seed(database)
    finally:
        await database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="Target database (tables are dropped and recreated)",
    )
    args = parser.parse_args()
    asyncio.run(run(args.database_url))


if __name__ == "__main__":
    main()
