"""Blog site, post, author and category operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _drop_none, _int, _str, _td

_POST_STATUS = {"type": "string", "enum": ["DRAFT", "PUBLISHED", "SCHEDULED", "ARCHIVED"],
                "description": "Publication status of the blog post"}
_PAGING = {
    "limit": _int("Number of results to return (default: 10)"),
    "offset": _int("Number of results to skip for pagination (default: 0)"),
}


class BlogTools(ToolModule):
    DEFINITIONS = [
        _td("create_blog_post", "Create a new blog post in GoHighLevel", {
            "title": _str("Blog post title"),
            "blog_id": _str("Blog site ID to publish the post on"),
            "content": _str("Full HTML content of the blog post"),
            "description": _str("Short description / meta description"),
            "image_url": _str("URL of the featured image"),
            "image_alt_text": _str("Alt text for the featured image"),
            "url_slug": _str("URL slug for the post (must be unique, see check_url_slug)"),
            "author": _str("Author ID"),
            "categories": _arr("Category IDs"),
            "tags": _arr("Tags for the post"),
            "status": _POST_STATUS,
            "canonical_link": _str("Canonical URL"),
            "published_at": _str("Publication date in ISO format (defaults to now)"),
        }, ["title", "blog_id", "content", "description", "url_slug", "author", "categories"]),
        _td("update_blog_post", "Update an existing blog post in GoHighLevel", {
            "post_id": _str("Blog post ID to update"),
            "blog_id": _str("Blog site ID the post belongs to"),
            "title": _str("Updated blog post title"),
            "content": _str("Updated HTML content"),
            "description": _str("Updated description"),
            "image_url": _str("Updated featured image URL"),
            "url_slug": _str("Updated URL slug"),
            "author": _str("Updated author ID"),
            "categories": _arr("Updated category IDs"),
            "tags": _arr("Updated tags"),
            "status": _POST_STATUS,
        }, ["post_id", "blog_id"]),
        _td("get_blog_posts", "Get blog posts from a specific blog site", {
            "blog_id": _str("Blog site ID to get posts from"),
            **_PAGING,
            "search_term": _str("Search term to filter posts"),
            "status": _POST_STATUS,
        }, ["blog_id"], read_only=True),
        _td("get_blog_sites", "Get all blog sites for the current location", {
            **_PAGING,
            "search_term": _str("Search term to filter blog sites"),
        }, read_only=True),
        _td("get_blog_authors", "Get all available blog authors for the current location",
            _PAGING, read_only=True),
        _td("get_blog_categories", "Get all available blog categories for the current location",
            _PAGING, read_only=True),
        _td("check_url_slug", "Check if a URL slug is available for use", {
            "url_slug": _str("URL slug to check"),
            "post_id": _str("Post ID to exclude when updating an existing post"),
        }, ["url_slug"], read_only=True),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def execute_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def create_blog_post(
        self,
        title: str,
        blog_id: str,
        content: str,
        description: str,
        url_slug: str,
        author: str,
        categories: list[str],
        image_url: str | None = None,
        image_alt_text: str | None = None,
        tags: list[str] | None = None,
        status: str = "DRAFT",
        canonical_link: str | None = None,
        published_at: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, title=title, blogId=blog_id, rawHTML=content,
            description=description, urlSlug=url_slug, author=author, categories=categories,
            imageUrl=image_url, imageAltText=image_alt_text, tags=tags, status=status,
            canonicalLink=canonical_link, publishedAt=published_at,
        )
        return await self._client.post("/blogs/posts", payload)

    async def update_blog_post(
        self,
        post_id: str,
        blog_id: str,
        title: str | None = None,
        content: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
        url_slug: str | None = None,
        author: str | None = None,
        categories: list[str] | None = None,
        tags: list[str] | None = None,
        status: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, blogId=blog_id, title=title, rawHTML=content,
            description=description, imageUrl=image_url, urlSlug=url_slug, author=author,
            categories=categories, tags=tags, status=status,
        )
        return await self._client.put(f"/blogs/posts/{post_id}", payload)

    async def get_blog_posts(
        self,
        blog_id: str,
        limit: int = 10,
        offset: int = 0,
        search_term: str | None = None,
        status: str | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, blogId=blog_id, limit=limit, offset=offset,
            searchTerm=search_term, status=status,
        )
        return await self._client.get("/blogs/posts/all", params)

    async def get_blog_sites(self, limit: int = 10, offset: int = 0, search_term: str | None = None) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, skip=offset, limit=limit, searchTerm=search_term,
        )
        return await self._client.get("/blogs/site/all", params)

    async def get_blog_authors(self, limit: int = 10, offset: int = 0) -> Any:
        params = {"locationId": self._client.location_id, "limit": limit, "offset": offset}
        return await self._client.get("/blogs/authors", params)

    async def get_blog_categories(self, limit: int = 10, offset: int = 0) -> Any:
        params = {"locationId": self._client.location_id, "limit": limit, "offset": offset}
        return await self._client.get("/blogs/categories", params)

    async def check_url_slug(self, url_slug: str, post_id: str | None = None) -> Any:
        params = _drop_none(locationId=self._client.location_id, urlSlug=url_slug, postId=post_id)
        return await self._client.get("/blogs/posts/url-slug-exists", params)
